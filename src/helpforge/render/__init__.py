"""Renderers that turn a :class:`~helpforge.models.Command` tree into shell completions."""

from helpforge.render.fish import FishRenderer, fish_quote

__all__ = ["FishRenderer", "fish_quote"]
