"""fullkek -- composes modular feature stacks into project blueprints.

The package decides *what* a generated project contains: it validates a
feature selection against the catalog, merges the chosen features into a
conflict-free blueprint, and collects the selection interactively.
"""

__version__ = "0.1.0"
