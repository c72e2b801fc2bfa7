# rocksteady_ci/config_build.py
"""
Build configuration extending the shared context
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .config import (
    PROJECT_NAME_VARS,
    ConfigSource,
    SharedContext,
    resolve_from,
)

ECR_REPO_VARS = ('ECR_REPO',) + PROJECT_NAME_VARS
ECR_BASE_VARS = ('ECR_BASE',)
AWS_ACCESS_KEY_ID_VARS = ('ECR_AWS_ACCESS_KEY_ID', 'AWS_ACCESS_KEY_ID')
AWS_SECRET_ACCESS_KEY_VARS = ('ECR_AWS_SECRET_ACCESS_KEY', 'AWS_SECRET_ACCESS_KEY')
AWS_REGION_VARS = ('ECR_AWS_REGION',)
COMMIT_SHA_VARS = ('CIRCLE_SHA1',)

BUILD_TOKEN_VAR = 'SIDEKIQ_PRO_TOKEN'
MAIN_BRANCH = 'master'


@dataclass
class BuildContext(SharedContext):
    """Everything needed to build, tag and push one image"""

    ecr_repo: str
    ecr_base: str
    aws_access_key_id: str
    aws_secret_access_key: str = field(repr=False)
    aws_region: str
    commit_sha: str
    build_token: Optional[str] = field(default=None, repr=False)

    # Derived
    tags: List[str] = field(init=False, default_factory=list)

    REQUIRED = {
        **SharedContext.REQUIRED,
        'ecr_repo': (
            ECR_REPO_VARS,
            "ECR repository is not set. Set ECR_REPO "
            "(falls back to ROCKSTEADY_PROJECT, then CIRCLE_PROJECT_REPONAME).",
        ),
        'ecr_base': (
            ECR_BASE_VARS,
            "ECR base URL is not set. Set ECR_BASE to the registry host, "
            "e.g. 123456789012.dkr.ecr.us-east-1.amazonaws.com.",
        ),
        'aws_access_key_id': (
            AWS_ACCESS_KEY_ID_VARS,
            "AWS access key is not set. Set ECR_AWS_ACCESS_KEY_ID or AWS_ACCESS_KEY_ID.",
        ),
        'aws_secret_access_key': (
            AWS_SECRET_ACCESS_KEY_VARS,
            "AWS secret key is not set. Set ECR_AWS_SECRET_ACCESS_KEY or AWS_SECRET_ACCESS_KEY.",
        ),
        'aws_region': (
            AWS_REGION_VARS,
            "AWS region is not set. Set ECR_AWS_REGION to the registry's region.",
        ),
        'commit_sha': (
            COMMIT_SHA_VARS,
            "Commit SHA is not set. Set CIRCLE_SHA1 to the commit being built.",
        ),
    }

    BUILD_FIELDS = (
        'ecr_repo',
        'ecr_base',
        'aws_access_key_id',
        'aws_secret_access_key',
        'aws_region',
        'commit_sha',
    )

    def __post_init__(self):
        super().__post_init__()
        self.tags = derive_tags(
            self.ecr_base, self.project_name, self.build_number, self.branch, self.commit_sha
        )

    @classmethod
    def from_source(cls, source: ConfigSource,
                    ensure_dependencies: Callable[[], None] = None) -> 'BuildContext':
        """
        Resolve in order: shared fields, dependencies, then build fields.
        The first missing value stops resolution.
        """
        values = cls.resolve_shared(source)
        if ensure_dependencies is not None:
            ensure_dependencies()
        for name in cls.BUILD_FIELDS:
            values[name] = resolve_from(source, *cls.REQUIRED[name])
        values['build_token'] = source.get(BUILD_TOKEN_VAR)
        return cls(**values)

    @property
    def safe_branch(self) -> str:
        return safe_branch(self.branch)

    def get_build_args(self) -> Dict[str, Optional[str]]:
        """Build args passed to docker; None means forward by name only"""
        return {BUILD_TOKEN_VAR: self.build_token}


def safe_branch(branch: str) -> str:
    """Branch name usable inside an image tag"""
    return branch.replace('/', '-')


def derive_tags(ecr_base: str, project_name: str, build_number: str,
                branch: str, commit_sha: str) -> List[str]:
    """Ordered image tags for one build"""
    image = f"{ecr_base}/{project_name}"
    branch_label = safe_branch(branch)

    tags = [
        f"{image}:build-{build_number}",
        f"{image}:{branch_label}-{build_number}",
        f"{image}:{branch_label}-latest",
        f"{image}:{commit_sha}",
    ]
    if branch == MAIN_BRANCH:
        tags.append(f"{image}:latest")
    return tags
