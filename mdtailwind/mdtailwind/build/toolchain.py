"""Node toolchain invocation: npm package checks and PostCSS compilation."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Iterable, Literal, Sequence

from ..core.errors import ExternalToolError, MissingInputError
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)


def run_logged(
    cmd: Iterable[str],
    *,
    capture_output: bool = False,
    text: bool = True,
    check: bool = True,
    echo: Literal["always", "on_error", "never"] = "on_error",
    **kwargs: object,
) -> subprocess.CompletedProcess[str]:
    """
    Run a subprocess, mirroring stdout/stderr to the caller even on failure.
    Returns the CompletedProcess; raises ExternalToolError when check=True and
    the command fails, times out, or cannot be started.
    """
    cmd_list = list(cmd)
    logger.debug(f"Running: {' '.join(cmd_list)}")
    try:
        result = subprocess.run(
            cmd_list,
            capture_output=capture_output,
            text=text,
            **kwargs,  # type: ignore[arg-type]
        )
    except subprocess.TimeoutExpired as exc:
        raise ExternalToolError(
            f"Command timed out after {exc.timeout}s: {' '.join(cmd_list)}",
            command=cmd_list,
        ) from exc
    except OSError as exc:
        raise ExternalToolError(
            f"Command could not be started: {' '.join(cmd_list)} ({exc})",
            command=cmd_list,
        ) from exc

    if capture_output and (
        echo == "always" or (echo == "on_error" and result.returncode != 0)
    ):
        if result.stdout:
            sys.stdout.write(result.stdout)
        if result.stderr:
            sys.stderr.write(result.stderr)
    if check and result.returncode != 0:
        raise ExternalToolError(
            f"Command failed with exit code {result.returncode}: {' '.join(cmd_list)}",
            command=cmd_list,
            returncode=result.returncode,
            stderr=result.stderr or "",
        )
    return result


def ensure(commands: Iterable[str]) -> None:
    for name in commands:
        if shutil.which(name) is None:
            raise ExternalToolError(f"missing dependency: {name}")


def package_installed(package: str, workdir: Path, settings: Settings) -> bool:
    result = run_logged(
        [settings.npm_command, "list", package],
        capture_output=True,
        check=False,
        echo="never",
        cwd=str(workdir),
    )
    return result.returncode == 0


def ensure_node_packages(workdir: Path, settings: Settings | None = None) -> list[str]:
    """Install each configured Node package into ``workdir`` if it is absent.

    Returns:
        Packages that had to be installed
    """
    settings = settings or get_settings()
    ensure([settings.npm_command])

    installed: list[str] = []
    for package in settings.node_packages:
        if package_installed(package, workdir, settings):
            logger.debug(f"npm package present: {package}")
            continue
        logger.info(f"Installing npm package {package}")
        run_logged(
            [settings.npm_command, "install", f"{package}@latest"],
            capture_output=True,
            cwd=str(workdir),
        )
        installed.append(package)
    return installed


def concatenate_sources(sources: Sequence[Path]) -> str:
    """Join stylesheets in order, as the compiler's single input."""
    parts: list[str] = []
    for source in sources:
        if not source.exists():
            raise MissingInputError(source)
        parts.append(source.read_text(encoding="utf-8"))
    return "\n".join(parts)


def compile_command(output: Path, settings: Settings) -> list[str]:
    return [*settings.postcss_command, "-o", output.name]


def compile_stylesheet(
    sources: Sequence[Path],
    output: Path,
    settings: Settings | None = None,
) -> Path:
    """Run PostCSS over ``sources`` and write the result to ``output``.

    The command runs in ``output``'s directory so PostCSS picks up the
    ``postcss.config.js`` and ``tailwind.config.js`` placed there.

    Args:
        sources: Seed stylesheet followed by user stylesheets, in order
        output: Compiled stylesheet path
        settings: Toolchain settings (defaults to environment settings)

    Returns:
        The compiled stylesheet path
    """
    settings = settings or get_settings()
    workdir = output.parent
    stdin_text = concatenate_sources(sources)
    cmd = compile_command(output, settings)

    logger.info(f"Compiling {len(sources)} stylesheet(s) → {output}")
    run_logged(
        cmd,
        input=stdin_text,
        capture_output=True,
        cwd=str(workdir),
        timeout=settings.compile_timeout,
    )

    if not output.exists() or output.stat().st_size == 0:
        raise ExternalToolError(
            f"Compiler produced no output at {output}",
            command=cmd,
        )
    return output
