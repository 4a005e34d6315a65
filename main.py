"""Entry point: builds a picker from the saved settings and logs its grid."""

import argparse
import logging

from calendar_logic import InvalidArgumentError
from logger import setup_logging
from picker import DatePicker
from settings import load_settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Summarize the date picker grid.")
    parser.add_argument("--locale", help="override the saved locale, e.g. de_CH")
    parser.add_argument("--debug", action="store_true", help="log every month and week row")
    args = parser.parse_args(argv)

    log = setup_logging(logging.DEBUG if args.debug else logging.INFO)
    settings = load_settings()
    if args.locale:
        settings["locale"] = args.locale

    try:
        picker = DatePicker.from_settings(settings)
    except InvalidArgumentError as e:
        log.error("Cannot build picker: %s", e)
        return 1

    log.info("Week starts: %s", " ".join(picker.weekday_labels()))
    for month, weeks in picker.grid:
        selectable = sum(c.is_selectable for row in weeks for c in row)
        log.info("%s: %d rows, %d selectable days", month.label, len(weeks), selectable)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
