#!/usr/bin/env python3
# Path: provisioner/cli/install_cli.py
"""
FFmpeg Install CLI
==================

Installs the FFmpeg executables into the storage directory.

Installation problems are reported but never fail the process:
the exit status is 0 whether or not FFmpeg was installed.
"""

import sys
import asyncio
import argparse
from pathlib import Path
from typing import Optional, Sequence

from rich.panel import Panel
from rich.table import Table

from provisioner import __version__
from provisioner.core.logger import get_logger
from provisioner.core.config_loader import ConfigLoader
from provisioner.core.display import console
from provisioner.core.models import SystemIdentity, ToolPaths
from provisioner.core.system_info import (
    get_storage_dir,
    get_system_identity,
    resolve_existing_paths,
)
from provisioner.engine.coordinator import acquire
from provisioner.engine.constants import DOWNLOAD_SOURCES
from provisioner.constants import ENV_PROXY_INDEX

logger = get_logger(__name__, 'cli')

SEPARATOR = f"[dim]{'━' * 50}[/dim]"


def display_sources() -> None:
    """Numbered table of download sources."""
    table = Table(title="Download sources", show_header=True)
    table.add_column(ENV_PROXY_INDEX, justify="right", style="bold")
    table.add_column("Source", style="cyan")
    table.add_column("Base URL", style="dim")

    table.add_row("0", "Direct (no fallback)", DOWNLOAD_SOURCES[0].base_url)
    for index, source in enumerate(DOWNLOAD_SOURCES, 1):
        table.add_row(str(index), source.name, source.base_url)

    console.print(table)


def display_system_info(identity: SystemIdentity, storage_dir: Path, source_index: Optional[int]) -> None:
    """System info panel shown before a download."""
    if source_index is None:
        mode = "automatic (speed test)"
    else:
        mode = f"[yellow]manual (index {source_index})[/yellow]"

    console.print(Panel(
        f"Platform: {identity.platform.value}\n"
        f"Architecture: {identity.architecture.value}\n"
        f"Storage: {storage_dir}\n"
        f"Source: {mode}",
        title="System information",
        border_style="cyan"
    ))


def display_installed(paths: ToolPaths) -> None:
    console.print(SEPARATOR)
    console.print("[green bold]✓ FFmpeg installed[/green bold]\n")
    console.print("[cyan]Installed components:[/cyan]")
    console.print(f"[green]  ✓ ffmpeg:  {paths.ffmpeg_path}[/green]")
    console.print(f"[green]  ✓ ffprobe: {paths.ffprobe_path}[/green]")
    if paths.ffplay_path:
        console.print(f"[green]  ✓ ffplay:  {paths.ffplay_path}[/green]")
    console.print(SEPARATOR)


def display_failure(error: Exception) -> None:
    """Diagnostics and suggestions after a failed install."""
    console.print(SEPARATOR)
    console.print("[red bold]✗ FFmpeg installation failed[/red bold]\n")
    console.print("[yellow]Error:[/yellow]")
    console.print(f"[dim]  {error}[/dim]")
    console.print("\n[yellow]Suggestions:[/yellow]")
    console.print("[dim]  1. Check your network connection[/dim]")
    console.print("[dim]  2. Retry: ffmpeg-provision[/dim]")
    console.print(
        f"[dim]  3. Pick a source: {ENV_PROXY_INDEX}=1~{len(DOWNLOAD_SOURCES)} ffmpeg-provision "
        f"(see --list-sources)[/dim]"
    )
    console.print(SEPARATOR)


def install(target_dir: Optional[Path], source_index: Optional[int]) -> int:
    """
    Install FFmpeg unless already present.

    Args:
        target_dir: Install directory override
        source_index: Explicit source index or None for automatic

    Returns:
        Exit status (always 0)
    """
    try:
        identity = get_system_identity()

        if target_dir is not None:
            storage_dir = Path(target_dir).expanduser()
            storage_dir.mkdir(parents=True, exist_ok=True)
        else:
            storage_dir = get_storage_dir()

        existing = resolve_existing_paths(storage_dir, identity)
        if existing.is_complete:
            console.print(f"[green]FFmpeg already installed in {storage_dir}, skipping download[/green]")
            return 0

        display_system_info(identity, storage_dir, source_index)

        paths = asyncio.run(acquire(identity, storage_dir, source_index))
        display_installed(paths)

    except KeyboardInterrupt:
        console.print("\n[yellow]Installation interrupted by user[/yellow]")

    except Exception as e:
        logger.error(f"Installation failed: {e}")
        display_failure(e)

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""

    parser = argparse.ArgumentParser(
        prog="ffmpeg-provision",
        description="Download prebuilt FFmpeg executables from the fastest available source",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Install into the default storage directory
  ffmpeg-provision

  # Install into a specific directory
  ffmpeg-provision --dir ./bin

  # Use the GitHub origin only
  ffmpeg-provision --source 0

  # Same, through the environment
  {ENV_PROXY_INDEX}=0 ffmpeg-provision
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'ffmpeg-provisioner {__version__}'
    )
    parser.add_argument(
        '-d', '--dir',
        type=Path,
        help='Install directory (default: FFMPEG_INSTALL_DIR or <sys.prefix>/.ffmpeg)'
    )
    parser.add_argument(
        '-s', '--source',
        type=int,
        help=f'Source index: 0 = direct only, 1-{len(DOWNLOAD_SOURCES)} = specific source '
             f'(overrides {ENV_PROXY_INDEX})'
    )
    parser.add_argument(
        '--list-sources',
        action='store_true',
        help='List download sources and exit'
    )

    args = parser.parse_args(argv)

    if args.list_sources:
        display_sources()
        return 0

    source_index = args.source if args.source is not None else ConfigLoader().get('proxy_index')
    return install(args.dir, source_index)


if __name__ == "__main__":
    sys.exit(main())
