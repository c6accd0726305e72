"""minifmt renderers.

Renderers convert typed syntax-tree nodes into source text.

Available Renderers:
- RustRenderer: Renders a tree to canonically formatted Rust source

Thread Safety:
All renderers use a StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from minifmt.renderers.rust import RenderContext, RustRenderer

__all__ = ["RenderContext", "RustRenderer"]
