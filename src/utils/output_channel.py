"""Line-oriented diagnostic output for dbt-core-interface requests."""

import logging

OUTPUT_CHANNEL_NAME = "dbt_interface.output"
HYPHEN_COUNT = 30


class OutputChannel:
    """Appends plain text lines to a logger.

    Every line becomes one log record, so the channel can be routed to a
    file, the console or an editor panel with ordinary logging handlers.
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.WARNING):
        self.logger = logger or logging.getLogger(OUTPUT_CHANNEL_NAME)
        self.level = level

    def append_line(self, line: object) -> None:
        self.logger.log(self.level, "%s", line)

    def append_hyphenated_line(self, count: int = HYPHEN_COUNT) -> None:
        self.append_line("-" * count)
