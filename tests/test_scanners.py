"""Tests for the manifest, Dockerfile, infrastructure, AI and host environment scanners."""

import json
import subprocess
import textwrap
from unittest.mock import Mock

import pytest

from eol_check._scanners import (
    Dependency,
    DependencyType,
    DetectedAIModel,
    EnvironmentInfo,
    ServiceVersion,
    clean_version,
    parse_aws_runtime,
    parse_image_reference,
    scan_ai_models,
    scan_ai_sdks,
    scan_dependencies,
    scan_dockerfiles,
    scan_for_model_usage,
    scan_infrastructure,
)
from eol_check._scanners import environment


def _write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


class TestCleanVersion:
    @pytest.mark.parametrize(
        "raw,expected",
        [("^1.2.3", "1.2.3"), ("~4.17", "4.17"), (">=3.9", "3.9"), ("18-alpine", "18"), ("latest", "latest")],
    )
    def test_clean_version(self, raw, expected):
        assert clean_version(raw) == expected


class TestDependencyScanners:
    def test_package_json(self, tmp_path):
        (tmp_path / "package.json").write_text(
            json.dumps({"dependencies": {"react": "^18.2.0"}, "devDependencies": {"typescript": "~5.3.0"}})
        )
        deps = scan_dependencies(tmp_path)
        assert Dependency("react", "^18.2.0", DependencyType.NPM, "package.json") in deps
        assert Dependency("typescript", "~5.3.0", DependencyType.NPM, "package.json") in deps

    def test_malformed_package_json_is_skipped(self, tmp_path):
        (tmp_path / "package.json").write_text("{broken")
        assert scan_dependencies(tmp_path) == []

    def test_composer_json(self, tmp_path):
        (tmp_path / "composer.json").write_text(json.dumps({"require": {"php": "^8.1", "laravel/framework": "^10.0"}}))
        names = {d.name for d in scan_dependencies(tmp_path)}
        assert names == {"php", "laravel/framework"}

    def test_requirements_txt(self, tmp_path):
        _write(
            tmp_path / "requirements.txt",
            """
            # comment
            django==4.2.7
            celery[redis]>=5.3
            -r other.txt
            requests
            flask ~= 3.0  # web
            """,
        )
        deps = {d.name: d.version for d in scan_dependencies(tmp_path)}
        assert deps == {"django": "4.2.7", "celery": "5.3", "flask": "3.0"}

    def test_pyproject_toml(self, tmp_path):
        _write(
            tmp_path / "pyproject.toml",
            """
            [project]
            name = "demo"
            requires-python = ">=3.10"
            dependencies = ["django>=5.0", "rich", "uvicorn[standard]>=0.30 ; python_version >= '3.10'"]
            """,
        )
        deps = {d.name: d.version for d in scan_dependencies(tmp_path)}
        assert deps == {"python": ">=3.10", "django": ">=5.0", "uvicorn": ">=0.30"}

    def test_go_mod(self, tmp_path):
        _write(
            tmp_path / "go.mod",
            """
            module example.com/app

            go 1.21

            require (
                github.com/gin-gonic/gin v1.9.1
                golang.org/x/net v0.17.0 // indirect
            )
            require github.com/google/uuid v1.4.0
            """,
        )
        deps = {d.name: d.version for d in scan_dependencies(tmp_path)}
        assert deps == {
            "go": "1.21",
            "github.com/gin-gonic/gin": "1.9.1",
            "golang.org/x/net": "0.17.0",
            "github.com/google/uuid": "1.4.0",
        }

    def test_gemfile(self, tmp_path):
        _write(
            tmp_path / "Gemfile",
            """
            source "https://rubygems.org"
            ruby '3.2.2'
            gem 'rails', '~> 7.1.0'
            gem "puma"
            """,
        )
        deps = {d.name: d.version for d in scan_dependencies(tmp_path)}
        assert deps == {"ruby": "3.2.2", "rails": "~> 7.1.0", "puma": "latest"}

    def test_empty_directory(self, tmp_path):
        assert scan_dependencies(tmp_path) == []


class TestPurl:
    def test_scoped_npm(self):
        dep = Dependency("@angular/core", "17.0.0", DependencyType.NPM, "package.json")
        assert dep.purl == "pkg:npm/%40angular/core@17.0.0"

    def test_pypi(self):
        assert Dependency("django", "4.2", DependencyType.PYTHON, "requirements.txt").purl == "pkg:pypi/django@4.2"

    def test_latest_has_no_version(self):
        assert Dependency("puma", "latest", DependencyType.RUBY, "Gemfile").purl == "pkg:gem/puma"


class TestDockerScanner:
    @pytest.mark.parametrize(
        "reference,expected",
        [
            ("node:18-alpine", ("node", "18-alpine")),
            ("python", ("python", "latest")),
            ("localhost:5000/app", ("localhost:5000/app", "latest")),
            ("localhost:5000/app:1.2", ("localhost:5000/app", "1.2")),
            ("nginx:1.25@sha256:abc", ("nginx", "1.25")),
        ],
    )
    def test_parse_image_reference(self, reference, expected):
        assert parse_image_reference(reference) == expected

    def test_scan_dockerfiles(self, tmp_path):
        _write(
            tmp_path / "Dockerfile",
            """
            FROM --platform=linux/amd64 node:18-alpine AS build
            RUN npm ci
            FROM build AS test
            FROM nginx:1.25
            COPY --from=build /app /usr/share/nginx/html
            """,
        )
        _write(tmp_path / "Dockerfile.worker", "FROM python:3.12-slim\n")
        _write(tmp_path / "tools.Dockerfile", "FROM scratch\n")

        deps = [(d.name, d.version, d.file) for d in scan_dockerfiles(tmp_path)]

        assert deps == [
            ("node", "18-alpine", "Dockerfile"),
            ("nginx", "1.25", "Dockerfile"),
            ("python", "3.12-slim", "Dockerfile.worker"),
        ]


class TestInfrastructureScanner:
    @pytest.mark.parametrize(
        "runtime,expected",
        [
            ("nodejs18.x", ("nodejs", "18")),
            ("python3.9", ("python", "3.9")),
            ("java8.al2", ("java", "8")),
            ("java21", ("java", "21")),
            ("dotnetcore3.1", ("dotnet", "3.1")),
            ("dotnet8", ("dotnet", "8")),
            ("ruby3.2", ("ruby", "3.2")),
            ("go1.x", ("go", "1")),
            ("provided.al2", None),
        ],
    )
    def test_parse_aws_runtime(self, runtime, expected):
        assert parse_aws_runtime(runtime) == expected

    def test_serverless(self, tmp_path):
        _write(
            tmp_path / "serverless.yml",
            """
            service: demo
            provider:
              name: aws
              runtime: nodejs16.x
            functions:
              api:
                handler: handler.api
                runtime: python3.8
              worker:
                handler: handler.worker
            """,
        )
        deps = [(d.name, d.version, d.file) for d in scan_infrastructure(tmp_path)]
        assert deps == [("nodejs", "16", "serverless.yml"), ("python", "3.8", "serverless.yml")]

    def test_sam_template_with_intrinsic_tags(self, tmp_path):
        _write(
            tmp_path / "template.yaml",
            """
            AWSTemplateFormatVersion: '2010-09-09'
            Transform: AWS::Serverless-2016-10-31
            Resources:
              Fn:
                Type: AWS::Serverless::Function
                Properties:
                  Runtime: python3.12
                  Role: !GetAtt Role.Arn
                  CodeUri: !Sub "s3://${Bucket}/code.zip"
                  Layers:
                    - !Ref Layer
            """,
        )
        deps = [(d.name, d.version) for d in scan_infrastructure(tmp_path)]
        assert deps == [("python", "3.12")]

    def test_terraform(self, tmp_path):
        _write(
            tmp_path / "main.tf",
            """
            resource "aws_lambda_function" "fn" {
              function_name = "fn"
              runtime       = "java11"
            }
            """,
        )
        deps = [(d.name, d.version, d.type) for d in scan_infrastructure(tmp_path)]
        assert deps == [("java", "11", DependencyType.INFRASTRUCTURE)]

    def test_invalid_yaml_is_skipped(self, tmp_path):
        _write(tmp_path / "serverless.yml", "provider: [unclosed\n")
        assert scan_infrastructure(tmp_path) == []


class TestAIScanner:
    def test_sdks_from_manifests(self, tmp_path):
        (tmp_path / "package.json").write_text(
            json.dumps({"dependencies": {"openai": "^4.20.0", "@anthropic-ai/sdk": "^0.20.0", "react": "18"}})
        )
        _write(tmp_path / "requirements.txt", "google_generativeai==0.5.0\nflask==3.0\n")

        sdks = {(s.sdk, s.provider, s.version, s.file) for s in scan_ai_sdks(tmp_path)}

        assert sdks == {
            ("openai", "openai", "^4.20.0", "package.json"),
            ("@anthropic-ai/sdk", "anthropic", "^0.20.0", "package.json"),
            ("google-generativeai", "google", "0.5.0", "requirements.txt"),
        }

    def test_model_usage(self, tmp_path):
        _write(
            tmp_path / "app.py",
            """
            client.chat.completions.create(model="gpt-4o-mini", messages=[])
            anthropic.messages.create(model="claude-3-5-sonnet-20241022")
            """,
        )
        _write(tmp_path / "src" / "config.ts", "export const MODEL = 'gemini-1.5-pro-latest';\n")

        models = set(scan_for_model_usage(tmp_path))

        assert models == {
            DetectedAIModel("openai", "gpt-4o-mini", "latest", "app.py"),
            DetectedAIModel("anthropic", "claude-3.5-sonnet", "20241022", "app.py"),
            DetectedAIModel("google", "gemini-1.5-pro", "latest", "src/config.ts"),
        }

    def test_model_reported_once(self, tmp_path):
        _write(tmp_path / "a.py", 'MODEL = "gpt-4o"\n')
        _write(tmp_path / "b.py", 'MODEL = "gpt-4o"\n')
        models = scan_for_model_usage(tmp_path)
        assert [(m.model, m.source) for m in models] == [("gpt-4o", "a.py")]

    def test_env_file(self, tmp_path):
        _write(tmp_path / ".env", "OPENAI_API_KEY=sk-test\nANTHROPIC_MODEL=claude-sonnet-4-20250514\n")
        models = scan_for_model_usage(tmp_path)
        assert [(m.provider, m.model, m.source) for m in models] == [("anthropic", "claude-sonnet-4", ".env")]

    def test_skips_vendored_and_deep_directories(self, tmp_path):
        _write(tmp_path / "node_modules" / "pkg" / "index.js", 'const m = "gpt-4o";\n')
        _write(tmp_path / "a" / "b" / "c" / "d" / "deep.py", 'm = "gpt-4o"\n')
        assert scan_for_model_usage(tmp_path) == []

    def test_no_partial_identifier_match(self, tmp_path):
        _write(tmp_path / "app.py", 'name = "gpt-4o-mini-tts"\n')
        models = scan_for_model_usage(tmp_path)
        assert all(m.model != "gpt-4o" for m in models)

    def test_scan_ai_models(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"dependencies": {"openai": "4.0.0"}}))
        _write(tmp_path / "index.js", 'openai.chat({ model: "gpt-4" })\n')
        result = scan_ai_models(tmp_path)
        assert [s.sdk for s in result.sdks] == ["openai"]
        assert [(m.model, m.version) for m in result.models] == [("gpt-4", "latest")]


class TestEnvironmentScanner:
    def test_run_version_command_missing_binary(self, monkeypatch):
        monkeypatch.setattr(environment.shutil, "which", lambda command: None)
        run = Mock()
        monkeypatch.setattr(environment.subprocess, "run", run)

        assert environment.run_version_command("node") is None
        run.assert_not_called()

    def test_run_version_command_combines_streams(self, monkeypatch):
        monkeypatch.setattr(environment.shutil, "which", lambda command: f"/usr/bin/{command}")
        run = Mock(return_value=subprocess.CompletedProcess([], 0, stdout="", stderr="nginx version: nginx/1.24.0\n"))
        monkeypatch.setattr(environment.subprocess, "run", run)

        assert environment.run_version_command("nginx", ("-v",)) == "nginx version: nginx/1.24.0"
        args, kwargs = run.call_args
        assert args[0] == ["/usr/bin/nginx", "-v"]
        assert kwargs["timeout"] == environment.PROBE_TIMEOUT
        assert "shell" not in kwargs

    def test_run_version_command_timeout(self, monkeypatch):
        monkeypatch.setattr(environment.shutil, "which", lambda command: "/usr/bin/slow")
        monkeypatch.setattr(
            environment.subprocess, "run", Mock(side_effect=subprocess.TimeoutExpired("slow", environment.PROBE_TIMEOUT))
        )
        assert environment.run_version_command("slow") is None

    @pytest.mark.parametrize(
        "output,expected",
        [
            ("Docker version 24.0.7, build afdd53b", "24.0.7"),
            ("psql (PostgreSQL) 16.1", "16.1"),
            ("Redis server v=7.2.3 sha=00000000:0", "7.2.3"),
            ("no digits here", None),
            (None, None),
        ],
    )
    def test_extract_version(self, output, expected):
        assert environment.extract_version(output) == expected

    def test_detect_node_version(self, monkeypatch):
        monkeypatch.setattr(environment, "run_version_command", lambda command, args=("--version",): "v20.11.0\n")
        assert environment.detect_node_version() == "20.11.0"

    def test_detect_node_version_absent(self, monkeypatch):
        monkeypatch.setattr(environment, "run_version_command", lambda command, args=("--version",): None)
        assert environment.detect_node_version() is None

    def test_parse_os_release(self):
        fields = environment.parse_os_release('# comment\nNAME="Ubuntu"\nVERSION_ID="22.04"\nID=ubuntu\n\n')
        assert fields == {"NAME": "Ubuntu", "VERSION_ID": "22.04", "ID": "ubuntu"}

    def test_detect_os_name_prefers_pretty_name(self, tmp_path):
        os_release = tmp_path / "os-release"
        os_release.write_text('NAME="Debian GNU/Linux"\nPRETTY_NAME="Debian GNU/Linux 12 (bookworm)"\n')
        assert environment.detect_os_name([tmp_path / "missing", os_release]) == "Debian GNU/Linux 12 (bookworm)"

    def test_detect_os_name_falls_back_to_name_and_version(self, tmp_path):
        os_release = tmp_path / "os-release"
        os_release.write_text('NAME="Alpine Linux"\nVERSION_ID=3.19.1\n')
        assert environment.detect_os_name([os_release]) == "Alpine Linux 3.19.1"

    def test_detect_os_name_without_os_release(self, tmp_path):
        assert environment.detect_os_name([tmp_path / "missing"]) is None

    def test_detect_services_first_probe_wins(self, monkeypatch):
        outputs = {"postgres": None, "psql": "psql (PostgreSQL) 15.4", "git": "git version 2.43.0"}
        calls = []

        def fake_run(command, args=("--version",)):
            calls.append(command)
            return outputs.get(command)

        monkeypatch.setattr(environment, "run_version_command", fake_run)
        probes = [
            environment.ServiceProbe("PostgreSQL", "postgres", ("--version",), "postgresql"),
            environment.ServiceProbe("PostgreSQL", "psql", ("--version",), "postgresql"),
            environment.ServiceProbe("PostgreSQL", "pg_ctl", ("--version",), "postgresql"),
            environment.ServiceProbe("Git", "git", ("--version",), "git"),
        ]

        services = environment.detect_services(probes)

        assert services == [
            ServiceVersion("PostgreSQL", "15.4", "postgresql"),
            ServiceVersion("Git", "2.43.0", "git"),
        ]
        assert "pg_ctl" not in calls

    def test_scan_environment(self, monkeypatch):
        monkeypatch.setattr(environment, "detect_python_version", lambda: "3.12.1")
        monkeypatch.setattr(environment, "detect_node_version", lambda: None)
        monkeypatch.setattr(environment, "detect_os_name", lambda: "Ubuntu 24.04 LTS")
        monkeypatch.setattr(environment, "detect_services", lambda: [ServiceVersion("Git", "2.43.0", "git")])

        info = environment.scan_environment()

        assert info == EnvironmentInfo(
            python_version="3.12.1",
            node_version=None,
            os_name="Ubuntu 24.04 LTS",
            services=(ServiceVersion("Git", "2.43.0", "git"),),
        )
