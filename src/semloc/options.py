from __future__ import annotations


class SearchOptions:
    __slots__ = ("include_hidden", "include_presentational")

    include_hidden: bool
    include_presentational: bool

    def __init__(self, include_hidden: bool = False, include_presentational: bool = False) -> None:
        self.include_hidden = bool(include_hidden)
        self.include_presentational = bool(include_presentational)

    def __repr__(self) -> str:
        return (
            f"SearchOptions(include_hidden={self.include_hidden}, "
            f"include_presentational={self.include_presentational})"
        )
