"""
Entry point for running topo_shapes as a module
This allows running: python -m topo_shapes
"""

from .cli import app

if __name__ == "__main__":
    app()
