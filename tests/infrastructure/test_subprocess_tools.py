"""Tests for subprocess_tools module.

This module tests async subprocess execution including:
- Successful subprocess execution
- Non-zero exit codes
- Timeout handling
- Non-retriable errors (FileNotFoundError, PermissionError)
- Process termination
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from coursefork.infrastructure.services.subprocess_tools import (
    DEFAULT_TIMEOUT,
    SubprocessError,
    SubprocessResult,
    run_subprocess,
    try_to_terminate_process,
)


def make_process(return_code=0, stdout=b"", stderr=b""):
    process = MagicMock()
    process.returncode = return_code
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    return process


class TestSubprocessResult:
    def test_ok_for_zero_exit_code(self):
        assert SubprocessResult(0, "", "").ok

    def test_not_ok_for_non_zero_exit_code(self):
        assert not SubprocessResult(1, "", "boom").ok

    def test_default_timeout(self):
        assert DEFAULT_TIMEOUT == 120


class TestRunSubprocess:
    @pytest.mark.asyncio
    async def test_successful_execution_decodes_output(self):
        process = make_process(stdout=b"main\n", stderr=b"")
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
            outcome = await run_subprocess(["git", "branch"])
        assert outcome == SubprocessResult(0, "main\n", "")

    @pytest.mark.asyncio
    async def test_non_zero_exit_code_is_returned(self):
        process = make_process(return_code=128, stderr=b"fatal")
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
            outcome = await run_subprocess(["git", "status"])
        assert outcome.return_code == 128
        assert outcome.stderr == "fatal"

    @pytest.mark.asyncio
    async def test_subprocess_called_with_correct_args(self, tmp_path):
        process = make_process()
        with patch(
            "asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)
        ) as mock_create:
            await run_subprocess(["cmd", "arg1", "arg2"], cwd=tmp_path, env={"A": "1"})

        call_args = mock_create.call_args
        assert call_args.args == ("cmd", "arg1", "arg2")
        assert call_args.kwargs["cwd"] == tmp_path
        assert call_args.kwargs["env"] == {"A": "1"}
        assert call_args.kwargs["stdout"] == asyncio.subprocess.PIPE
        assert call_args.kwargs["stderr"] == asyncio.subprocess.PIPE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [FileNotFoundError("git"), PermissionError("git")])
    async def test_non_retriable_errors(self, error):
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(side_effect=error)):
            with pytest.raises(SubprocessError, match="non-retriable"):
                await run_subprocess(["git", "status"])

    @pytest.mark.asyncio
    async def test_timeout_terminates_process(self):
        process = make_process()
        process.communicate = AsyncMock(side_effect=asyncio.TimeoutError)
        terminate = AsyncMock()
        with (
            patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)),
            patch(
                "coursefork.infrastructure.services.subprocess_tools.try_to_terminate_process",
                new=terminate,
            ),
        ):
            with pytest.raises(SubprocessError, match="timed out after 5 seconds"):
                await run_subprocess(["git", "push"], timeout=5)
        terminate.assert_awaited_once_with(process)


class TestTryToTerminateProcess:
    @pytest.mark.asyncio
    async def test_terminates_and_kills_if_still_running(self):
        process = MagicMock()
        process.returncode = None
        with patch("asyncio.sleep", new=AsyncMock()):
            await try_to_terminate_process(process)
        process.terminate.assert_called_once()
        process.kill.assert_called_once()

    @pytest.mark.asyncio
    async def test_does_not_kill_terminated_process(self):
        process = MagicMock()
        process.returncode = -15
        with patch("asyncio.sleep", new=AsyncMock()):
            await try_to_terminate_process(process)
        process.kill.assert_not_called()

    @pytest.mark.asyncio
    async def test_process_already_gone(self):
        process = MagicMock()
        process.terminate.side_effect = ProcessLookupError
        await try_to_terminate_process(process)
        process.kill.assert_not_called()
