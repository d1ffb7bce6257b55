import logging
from collections import Counter, defaultdict

logger = logging.getLogger(__name__)

# Event counters, keyed by module name.
COUNTERS: defaultdict[str, Counter[str]] = defaultdict(Counter)


def log_counters(level: int = logging.INFO) -> None:
    """Log all nonempty counters, sorted by module then event name."""
    lines: list[str] = []
    for module, counter in sorted(COUNTERS.items()):
        for name, count in sorted(counter.items()):
            if count:
                lines.append(f"{module}.{name} = {count}")
    if lines:
        logger.log(level, "Counters:\n" + "\n".join(lines))

