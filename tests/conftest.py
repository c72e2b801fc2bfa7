"""Shared fixtures: a CI-like environment and fakes for the external tools."""

from __future__ import annotations

import pytest

from rocksteady_ci.errors import ExternalOperationFailure
from rocksteady_ci.registry import ImageRegistry
from rocksteady_ci.webhook import HttpClient


class FakeRegistry(ImageRegistry):
    """Records every call; optionally fails on one step."""

    def __init__(self, fail_login=False, fail_build=False, fail_push_on=None):
        self.calls = []
        self.fail_login = fail_login
        self.fail_build = fail_build
        self.fail_push_on = fail_push_on

    def login(self, region, access_key_id, secret_access_key):
        self.calls.append(("login", region, access_key_id, secret_access_key))
        if self.fail_login:
            raise ExternalOperationFailure("docker login", "denied")

    def build(self, tags, build_args, context_dir="."):
        self.calls.append(("build", list(tags), dict(build_args), context_dir))
        if self.fail_build:
            raise ExternalOperationFailure("docker build", "exit code 1")

    def push(self, tag):
        self.calls.append(("push", tag))
        if tag == self.fail_push_on:
            raise ExternalOperationFailure("docker push", "exit code 1")

    @property
    def pushed(self):
        return [call[1] for call in self.calls if call[0] == "push"]


class FakeHttpClient(HttpClient):
    def __init__(self, status=200, error=None):
        self.requests = []
        self.status = status
        self.error = error

    def post(self, url, body, headers):
        self.requests.append((url, body, dict(headers)))
        if self.error is not None:
            raise self.error
        return self.status


@pytest.fixture
def shared_env() -> dict:
    """Variables CircleCI sets for every job."""
    return {
        "CIRCLE_PROJECT_REPONAME": "app",
        "CIRCLE_BUILD_NUM": "42",
        "CIRCLE_BRANCH": "feature/x",
    }


@pytest.fixture
def build_env(shared_env: dict) -> dict:
    return {
        **shared_env,
        "ECR_BASE": "registry.example.com",
        "AWS_ACCESS_KEY_ID": "AKIAEXAMPLE",
        "AWS_SECRET_ACCESS_KEY": "secret",
        "ECR_AWS_REGION": "us-east-1",
        "CIRCLE_SHA1": "abc123",
    }


@pytest.fixture
def deploy_env(shared_env: dict) -> dict:
    return {**shared_env, "ROCKSTEADY_SERVER": "https://rocksteady.example.com"}


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def http_client() -> FakeHttpClient:
    return FakeHttpClient()


def no_dependencies() -> None:
    pass
