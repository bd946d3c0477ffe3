"""
Factory function for creating remote mirrors.
"""
from pulse_api.config import Config
from pulse_api.github_mirror import GitHubMirror
from pulse_api.local_only_mirror import LocalOnlyMirror
from pulse_api.remote_mirror import RemoteMirror
from pulse_api.tigris_mirror import TigrisMirror


def create_remote_mirror(config: Config) -> RemoteMirror:
    """
    Create a remote mirror based on configuration.

    Reads MIRROR_STORAGE_TYPE to determine which implementation to use:
    - 'github' or unset: GitHubMirror (default)
    - 'tigris': TigrisMirror
    - 'none' or 'local': LocalOnlyMirror

    Args:
        config: Application configuration

    Returns:
        RemoteMirror: Configured mirror instance
    """
    storage_type = config.mirror_storage_type

    if storage_type == 'tigris':
        return TigrisMirror(
            access_key_id=config.aws_access_key_id or None,
            secret_access_key=config.aws_secret_access_key or None,
            endpoint_url=config.aws_endpoint_url_s3 or None,
            bucket_name=config.tigris_bucket_name or None,
            region=config.aws_region or None,
            public_url=config.tigris_public_url
        )
    if storage_type in ('none', 'local'):
        return LocalOnlyMirror(
            state_dir=config.state_dir,
            image_base_url=config.local_image_base_url
        )
    return GitHubMirror(
        token=config.github_token,
        owner=config.repo_owner,
        repo=config.repo_name,
        branch=config.repo_branch,
        api_url=config.github_api_url,
        raw_host=config.github_raw_host
    )
