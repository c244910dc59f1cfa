from __future__ import annotations

"""
Tree Renderer.

Converts the DirectoryNode tree into box-drawing text lines. The last
child at each level takes the corner connector and drops the vertical
continuation from the indentation it hands down.
"""

from typing import List

from repopacker.domain.tree_models import DirectoryNode

ROOT_INDENT = "  "

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree_structure(
        node: DirectoryNode,
        lines: List[str],
        prefix: str = "",
) -> None:
    """
    Recursively append the children of `node` to `lines`.

    Directories are suffixed with '/'. Child order is taken as-is from the
    node, which the walker already sorted.

    Args:
        node: Directory whose children are rendered.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    total = len(node.children)

    for i, child in enumerate(node.children):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        label = f"{child.name}/" if child.is_directory else child.name
        lines.append(f"{prefix}{connector}{label}")

        if child.is_directory:
            render_tree_structure(
                child,
                lines,
                prefix=prefix + ("    " if is_last else "│   "),
            )


def render_directory_tree(root: DirectoryNode) -> str:
    """
    Render the whole tree, starting with a '<root-name>/' line.

    Args:
        root: Root node returned by the walker.

    Returns:
        str: Newline-joined tree drawing.
    """
    lines: List[str] = [f"{root.name}/"]
    render_tree_structure(root, lines, prefix=ROOT_INDENT)
    return "\n".join(lines)
