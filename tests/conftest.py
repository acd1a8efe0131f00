"""Pytest configuration and fixtures for goscript tests."""

import os
from pathlib import Path

import pytest

from goscript.config import GoScriptConfig, InvocationContext
from goscript.descriptions import CommentParser
from goscript.dispatcher import Dispatcher
from goscript.roots import RootSet

BUILTINS = ["commands", "complete", "help", "modules", "plugins"]


def write_script(path: Path, header: str, executable: bool = False, body: str = "echo ok\n") -> Path:
    """Create a script with a shebang, the given header and a body."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#! /usr/bin/env bash\n{header}\n{body}")
    if executable:
        path.chmod(0o755)
    return path


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Create a project with a core tree, three plugins and project scripts.

    Layout::

        core/lib/{format,log}          core/libexec/env
        project/scripts/lib/{log,project-lib}
        project/scripts/{build,deploy}  project/scripts/deploy.d/{prod,staging}
        project/scripts/plugins/bar/{bin/bar-cmd,lib/barlib}
        project/scripts/plugins/fiz/lib/fizzy
        project/scripts/plugins/foo/{bin/foo-cmd,lib/foo-util,lib/shared}

    Returns:
        The project root directory
    """
    core = tmp_path / "core"
    root = tmp_path / "project"
    scripts = root / "scripts"
    plugins = scripts / "plugins"

    write_script(core / "lib" / "format", "# format - text alignment helpers")
    write_script(core / "lib" / "log", "# log - core logging functions")
    write_script(core / "libexec" / "env", "# env - print shell environment setup", executable=True)

    write_script(scripts / "lib" / "log", "# log - project logging override")
    write_script(scripts / "lib" / "project-lib", "# project-lib - helpers for this project")
    write_script(scripts / "build", "# build - compile the project\n#\n# Usage: {{go}} {{cmd}}", executable=True)
    write_script(
        scripts / "deploy",
        "# deploy - ship the project\n#\n# Run '{{go}} {{cmd}} <env>' from {{root}}.",
        executable=True,
    )
    write_script(scripts / "deploy.d" / "prod", "# {{cmd}} - deploy to production", executable=True)
    write_script(scripts / "deploy.d" / "staging", "# deploy to staging", executable=True)
    (scripts / "notes.txt").write_text("# not a command\n")

    write_script(plugins / "bar" / "bin" / "bar-cmd", "# bar-cmd - command from bar", executable=True)
    write_script(plugins / "bar" / "lib" / "barlib", "# barlib - library from bar")
    write_script(plugins / "fiz" / "lib" / "fizzy", "# fizzy - library from fiz")
    write_script(plugins / "foo" / "bin" / "foo-cmd", "# foo-cmd - command from foo", executable=True)
    write_script(plugins / "foo" / "lib" / "foo-util", "# foo-util - utilities from foo")
    write_script(plugins / "foo" / "lib" / "shared", "# shared - shared code from foo")

    return root


@pytest.fixture
def config(tree: Path) -> GoScriptConfig:
    """Configuration pointing at the fake tree."""
    return GoScriptConfig.from_dict(
        {"project": {"root_dir": str(tree), "core_dir": str(tree.parent / "core")}}
    )


@pytest.fixture
def roots(config: GoScriptConfig) -> RootSet:
    return RootSet.from_config(config)


@pytest.fixture
def context() -> InvocationContext:
    return InvocationContext(go="./go", columns=80, imported_modules=["log", "foo/shared"])


@pytest.fixture
def parser(roots: RootSet) -> CommentParser:
    return CommentParser("./go", roots.root_dir, 80)


@pytest.fixture
def dispatcher(roots: RootSet, context: InvocationContext) -> Dispatcher:
    return Dispatcher(roots, context, BUILTINS)


@pytest.fixture
def in_tree(tree: Path):
    """Run the test from inside the project root."""
    orig_dir = os.getcwd()
    os.chdir(tree)
    yield tree
    os.chdir(orig_dir)
