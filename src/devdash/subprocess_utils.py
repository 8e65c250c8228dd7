"""Subprocess helpers shared by the git and gh gateways.

Both helpers convert process failures into RuntimeError carrying the
operation, the command line, and whatever the process wrote to stderr.
"""

import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any


def _format_command(cmd: Sequence[str]) -> str:
    return " ".join(str(arg) for arg in cmd)


def run_subprocess_with_context(
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path | None = None,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    **kwargs: Any,
) -> subprocess.CompletedProcess[str]:
    """Execute subprocess with enriched error reporting for the gateway layer.

    Wraps subprocess.run() to catch CalledProcessError and re-raise as RuntimeError
    with operation context, stderr output, and command details.

    Args:
        cmd: Command and arguments to execute
        operation_context: Human-readable description of operation
            (e.g. "fetch 'feature-x' from 'pr-42'")
        cwd: Working directory for command execution
        check: Whether to raise on non-zero exit (default: True)
        env: Full environment for the child process (None inherits ours)
        **kwargs: Additional arguments passed to subprocess.run()

    Returns:
        CompletedProcess instance from subprocess.run()

    Raises:
        RuntimeError: If command fails or its binary is missing
    """
    try:
        return subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=check,
            env=None if env is None else dict(env),
            **kwargs,
        )

    except subprocess.CalledProcessError as e:
        error_msg = f"Failed to {operation_context}"
        error_msg += f"\nCommand: {_format_command(cmd)}"
        error_msg += f"\nExit code: {e.returncode}"

        if e.stdout:
            stdout_stripped = str(e.stdout).strip()
            if stdout_stripped:
                error_msg += f"\nstdout: {stdout_stripped}"

        if e.stderr:
            stderr_stripped = str(e.stderr).strip()
            if stderr_stripped:
                error_msg += f"\nstderr: {stderr_stripped}"

        raise RuntimeError(error_msg) from e

    except FileNotFoundError as e:
        error_msg = f"Command not found while trying to {operation_context}: {cmd[0]}"
        error_msg += f"\nFull command: {_format_command(cmd)}"
        raise RuntimeError(error_msg) from e


def execute_gh_command(
    cmd: list[str], cwd: Path, env: Mapping[str, str] | None = None
) -> subprocess.CompletedProcess[str]:
    """Execute a gh CLI command without raising on a non-zero exit.

    gh reports HTTP errors on stderr with a non-zero exit code; callers inspect
    the returncode and stderr to classify the failure.

    Raises:
        RuntimeError: If gh is not installed
    """
    return run_subprocess_with_context(
        cmd,
        operation_context="execute gh command",
        cwd=cwd,
        check=False,
        env=env,
    )
