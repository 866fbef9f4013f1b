from coursefork.infrastructure.git.git_client import GitClient, parse_porcelain_status, parse_remotes

__all__ = ["GitClient", "parse_porcelain_status", "parse_remotes"]
