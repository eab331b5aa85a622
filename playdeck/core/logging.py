import logging
import sys

_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class SafeExtraFormatter(logging.Formatter):
    """
    Formatter that renders whatever was passed through `extra=`
    and never fails when a record carries none.
    """

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "extra"):
            record.extra = {
                k: v for k, v in vars(record).items() if k not in _RESERVED
            }
        return super().format(record)


def setup_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler(sys.stdout)

    formatter = SafeExtraFormatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s | %(extra)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers.clear()
    root.addHandler(handler)
