"""Errors raised before a parse starts."""


class ParserConfigurationError(Exception):
    """No usable dialect can be selected; nothing was parsed."""


class ParserNotConfiguredError(ParserConfigurationError):
    """Neither the cinema nor its cinema group names a parser."""

    def __init__(self, cinema_name: str) -> None:
        super().__init__(
            f"No parser configured for cinema '{cinema_name}'. "
            "Configure a parser on the cinema or its cinema group."
        )
        self.cinema_name = cinema_name


class UnknownParserError(ParserConfigurationError):
    """The requested parser slug is not registered."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Parser not found: {slug}")
        self.slug = slug
