"""Help-text parser -- run a tool, split its help into sections, read the columns.

This sub-package holds the primitives that
:class:`~helpforge.generator.forge.CommandForge` composes into a command tree:

Typical usage::

    from helpforge.parser import ProcessInvoker, scan_sections, split_columns

    text = ProcessInvoker().run(["docker", "network", "--help"])
    sections = scan_sections(text, ["Options:", "Commands:"])
    pairs = split_columns(sections.get("Commands:", []))

Sub-modules:

* :mod:`~helpforge.parser.invoker` -- Run the target tool and capture its
  help output.
* :mod:`~helpforge.parser.sections` -- Partition help text into
  marker-keyed line groups.
* :mod:`~helpforge.parser.columns` -- Detect the name/description column of
  a line group and split it.
* :mod:`~helpforge.parser.usage` -- Infer argument kinds from usage lines.
"""

from helpforge.parser.columns import find_split_column, split_columns
from helpforge.parser.invoker import Invoker, ProcessInvoker
from helpforge.parser.sections import scan_sections
from helpforge.parser.usage import classify_arguments

__all__ = [
    "Invoker",
    "ProcessInvoker",
    "classify_arguments",
    "find_split_column",
    "scan_sections",
    "split_columns",
]
