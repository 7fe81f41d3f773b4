"""Example: monthly sales report built from dotted-key running totals."""

from pathlib import Path

from runtotal import Total, TotalConfig

CONFIG_PATH = Path(__file__).resolve().parent / "config" / "total.yaml"

SALES = [
    ("march.first.am", 120.5),
    ("march.first.pm", 80),
    ("march.second.am", 1500),
    ("april.first.am", 42.25),
    ("april.first.am", 7.75),
]


def build_report(sales=SALES) -> Total:
    """Accumulate ``(key, amount)`` pairs into a Total using the example config."""
    total = Total(TotalConfig.load(str(CONFIG_PATH), section="reporting.total"))
    for key, amount in sales:
        total.set(key, amount)
    return total


def render(total: Total) -> list[str]:
    lines = []
    for month in total:
        node = total.get(month)
        lines.append(f"{month}: {node.total()}")
        for week in node:
            lines.append(f"  {week}: {node.get(week).total()}")
    lines.append(f"total: {total.total()}")
    return lines


if __name__ == "__main__":
    print("\n".join(render(build_report())))
