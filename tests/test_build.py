"""Tests for the build subcommand: ordering of login, build and pushes."""

from __future__ import annotations

import pytest

from rocksteady_ci.builder import BuildCommand
from rocksteady_ci.errors import MissingDependency

from .conftest import FakeRegistry, no_dependencies


def make_command(registry, ensure_dependencies=no_dependencies):
    return BuildCommand(
        registry_factory=lambda dry_run: registry,
        ensure_dependencies=ensure_dependencies,
    )


class TestBuildCommand:
    def test_login_build_then_push_every_tag(self, build_env, registry):
        exit_code = make_command(registry).run([], build_env)

        assert exit_code == 0
        assert registry.calls[0] == ("login", "us-east-1", "AKIAEXAMPLE", "secret")
        assert registry.calls[1] == (
            "build",
            [
                "registry.example.com/app:build-42",
                "registry.example.com/app:feature-x-42",
                "registry.example.com/app:feature-x-latest",
                "registry.example.com/app:abc123",
            ],
            {"SIDEKIQ_PRO_TOKEN": None},
            ".",
        )
        assert registry.pushed == registry.calls[1][1]

    def test_push_failure_aborts_remaining_tags(self, build_env):
        registry = FakeRegistry(fail_push_on="registry.example.com/app:feature-x-42")

        exit_code = make_command(registry).run([], build_env)

        assert exit_code == 1
        assert registry.pushed == [
            "registry.example.com/app:build-42",
            "registry.example.com/app:feature-x-42",
        ]

    def test_login_failure_skips_build(self, build_env):
        registry = FakeRegistry(fail_login=True)
        assert make_command(registry).run([], build_env) == 1
        assert [call[0] for call in registry.calls] == ["login"]

    def test_build_failure_skips_push(self, build_env):
        registry = FakeRegistry(fail_build=True)
        assert make_command(registry).run([], build_env) == 1
        assert registry.pushed == []

    def test_missing_configuration_exits_2_with_usage(self, build_env, registry, capsys):
        del build_env["ECR_BASE"]

        assert make_command(registry).run([], build_env) == 2
        assert registry.calls == []
        err = capsys.readouterr().err
        assert "ECR_BASE" in err
        assert "Usage:" in err

    def test_missing_docker_exits_3(self, build_env, registry, capsys):
        def missing_docker():
            raise MissingDependency("docker", "docker is required but was not found on PATH.")

        assert make_command(registry, missing_docker).run([], build_env) == 3
        assert registry.calls == []
        assert "docker" in capsys.readouterr().err

    def test_dry_run_flag_reaches_registry_factory(self, build_env, registry):
        seen = []

        def factory(dry_run):
            seen.append(dry_run)
            return registry

        command = BuildCommand(registry_factory=factory, ensure_dependencies=no_dependencies)
        assert command.run(["--dry-run"], build_env) == 0
        assert seen == [True]

    def test_unknown_option_is_usage_error(self, build_env, registry):
        with pytest.raises(SystemExit) as excinfo:
            make_command(registry).run(["--bogus"], build_env)
        assert excinfo.value.code == 2
