"""Shared test fixtures and helpers for sharpkit tests.

Provides:
- CliRunner fixtures: cli_runner, invoke_cli()
- Sample C# sources: POINT_CS, CUSTOMER_CS
- Project fixtures: csharp_project (git root + csproj + sources)
- JSON validation helpers: parse_json_output(), assert_json_envelope()
"""

from __future__ import annotations

import json
import os

import pytest
from click.testing import CliRunner

# ===========================================================================
# Sample sources
# ===========================================================================

# Two readonly properties at lines 2 and 3.
POINT_CS = (
    "public class Point\n"
    "{\n"
    "    public int X { get; }\n"
    "    public int Y { get; }\n"
    "}\n"
)

# Constructor signature at line 5; "name" starts at column 31.
CUSTOMER_CS = (
    "namespace Shop\n"
    "{\n"
    "    public class Customer\n"
    "    {\n"
    "\n"
    "        public Customer(string name, int age)\n"
    "        {\n"
    "        }\n"
    "    }\n"
    "}\n"
)

CUSTOMER_NAME_LINE = 5
CUSTOMER_NAME_COLUMN = 32

# CUSTOMER_CS after "Initialize field from parameter..." on "name".
CUSTOMER_WITH_FIELD = (
    "namespace Shop\n"
    "{\n"
    "    public class Customer\n"
    "    {\n"
    "        private readonly string name;\n"
    "\n"
    "        public Customer(string name, int age)\n"
    "        {\n"
    "            this.name = name;\n"
    "        }\n"
    "    }\n"
    "}\n"
)

CSPROJ = """<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <TargetFramework>net8.0</TargetFramework>
    <RootNamespace>Shop.Core</RootNamespace>
  </PropertyGroup>
  <ItemGroup>
    <PackageReference Include="Newtonsoft.Json" Version="13.0.3" />
    <PackageReference Include="Serilog" Version="3.1.1" />
  </ItemGroup>
  <ItemGroup>
    <ProjectReference Include="..\\Shop.Data\\Shop.Data.csproj" />
  </ItemGroup>
</Project>
"""

_ENV_VARS = (
    "SHARPKIT_TAB_SIZE",
    "SHARPKIT_USE_THIS",
    "SHARPKIT_PRIVATE_MEMBER_PREFIX",
    "SHARPKIT_REFORMAT",
)


@pytest.fixture(autouse=True)
def _clean_sharpkit_env(monkeypatch):
    """Keep developer SHARPKIT_* variables out of the tests."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


# ===========================================================================
# CliRunner helpers
# ===========================================================================


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


def invoke_cli(runner, args, cwd=None, json_mode=False):
    """Invoke the sharpkit CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["actions", "Point.cs", "-l", "3"])
        cwd: directory to run in
        json_mode: if True, prepend --json flag
    Returns:
        click.testing.Result
    """
    from sharpkit.cli import cli

    full_args = []
    if json_mode:
        full_args.append("--json")
    full_args.extend(str(a) for a in args)

    old_cwd = os.getcwd()
    try:
        if cwd:
            os.chdir(str(cwd))
        result = runner.invoke(cli, full_args, catch_exceptions=False)
    finally:
        os.chdir(old_cwd)

    return result


# ===========================================================================
# JSON validation helpers
# ===========================================================================


def parse_json_output(result, command=None):
    """Parse JSON from a CliRunner result's stdout."""
    assert result.exit_code == 0, f"Command {command or '?'} failed (exit {result.exit_code}):\n{result.output}"
    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as e:
        pytest.fail(f"Invalid JSON from {command or '?'}: {e}\nOutput was:\n{result.output[:500]}")


def assert_json_envelope(data, command=None):
    """Validate the sharpkit envelope contract."""
    assert isinstance(data, dict), f"Expected dict, got {type(data)}"
    for key in ("schema", "command", "version", "summary"):
        assert key in data, f"Missing {key!r} key in envelope"
    assert "timestamp" in data.get("_meta", {}), "Missing 'timestamp' in _meta"
    if command:
        assert data["command"] == command, f"Expected command={command}, got {data['command']}"
    assert isinstance(data["summary"], dict)


# ===========================================================================
# Project fixtures
# ===========================================================================


@pytest.fixture
def csharp_project(tmp_path):
    """A git-rooted C# project: Shop.Core.csproj, Models/Point.cs, Models/Customer.cs.

    Returns the project directory.
    """
    root = tmp_path / "shop"
    (root / ".git").mkdir(parents=True)
    (root / "Shop.Core.csproj").write_text(CSPROJ, encoding="utf-8")
    models = root / "Models"
    models.mkdir()
    (models / "Point.cs").write_text(POINT_CS, encoding="utf-8")
    (models / "Customer.cs").write_text(CUSTOMER_CS, encoding="utf-8")
    return root
