"""Tree generator -- build a :class:`~helpforge.models.Command` tree from help output.

Typical usage::

    from helpforge.generator import CommandForge
    from helpforge.tools import docker_profile

    profile = docker_profile()
    root = CommandForge(profile.parser).forge(profile.name)
    for node in root.walk():
        print(node.chain_string, len(node.options))

Sub-modules:

* :mod:`~helpforge.generator.forge` -- The recursive builder that turns
  sections, columns and usage lines into command nodes.
"""

from helpforge.generator.forge import CommandForge, forge_tree, parse_option_names

__all__ = ["CommandForge", "forge_tree", "parse_option_names"]
