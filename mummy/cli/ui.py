# mummy/cli/ui.py
"""
Shared UI helpers for CLI commands.

Usage:
    from mummy.cli.ui import ui

    ui.header("Mummy Build", "site -> out")
    ui.success("Done!")
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.tree import Tree

from mummy.artifact.models import Artifact, DirectoryArtifact
from mummy.core.context import BuildSummary, MummyContext

console = Console()


def _label(context: MummyContext, artifact: Artifact) -> str:
    relative = artifact.target_path.relative_to(context.target_root)
    name = escape(relative.as_posix()) if relative.parts else "."
    state = "[yellow]dirty[/yellow]" if artifact.description.is_dirty else "[dim]cached[/dim]"
    label = f"{name} [dim]({artifact.mummifier.plugin_name})[/dim]"
    if isinstance(artifact, DirectoryArtifact):
        return label
    if artifact.aspect is not None:
        label += f" [cyan]aspect={artifact.aspect}[/cyan]"
    return f"{label} {state}"


def artifact_tree(context: MummyContext, root: Artifact, tree: Optional[Tree] = None) -> Tree:
    """Render a planned artifact graph as a rich Tree."""
    node = Tree(_label(context, root)) if tree is None else tree.add(_label(context, root))
    for aspect in root.aspects:
        node.add(_label(context, aspect))
    if isinstance(root, DirectoryArtifact):
        if root.content_artifact is not None:
            artifact_tree(context, root.content_artifact, node)
        for child in sorted(root.child_artifacts, key=lambda a: str(a.target_path)):
            artifact_tree(context, child, node)
    return node


class UI:
    """Unified console output for the CLI."""

    def header(self, title: str, subtitle: str = "") -> None:
        """Print a fitted command header."""
        content = f"[bold]{escape(title)}[/bold]"
        if subtitle:
            content += f"\n[dim]{escape(subtitle)}[/dim]"
        console.print(Panel.fit(content, border_style="blue"))

    def success(self, msg: str) -> None:
        console.print(f"[green]✓[/green] {escape(msg)}")

    def error(self, msg: str) -> None:
        console.print(f"[red]✗[/red] {escape(msg)}", soft_wrap=True)

    def info(self, msg: str) -> None:
        console.print(f"[dim]{escape(msg)}[/dim]", soft_wrap=True)

    def tree(self, tree: Tree) -> None:
        console.print(tree)

    def yaml(self, content: str) -> None:
        console.print(Syntax(content, "yaml", theme="monokai"))

    def build_summary(self, summary: BuildSummary) -> None:
        """Print the outcome of a build, listing every failure."""
        style = "green" if summary.succeeded else "red"
        console.print(
            Panel(
                f"{summary}\n[dim]{summary.duration_seconds:.2f}s[/dim]",
                title="Build Summary",
                border_style=style,
            )
        )
        for failure in summary.failures:
            self.error(str(failure))


ui = UI()

__all__ = ["ui", "UI", "console", "artifact_tree"]
