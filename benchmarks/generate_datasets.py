"""Generate standardized benchmark documents for mdnav MCP."""

import random
from pathlib import Path

DATASETS_DIR = Path(__file__).parent / "datasets"

LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. "
    "Sed do eiusmod tempor incididunt ut labore et dolore magna aliqua. "
    "Ut enim ad minim veniam, quis nostrud exercitation ullamco laboris. "
)

TECH_WORDS = [
    "install", "configure", "deploy", "authenticate", "authorize",
    "database", "migration", "endpoint", "middleware", "controller",
    "component", "template", "routing", "caching", "logging",
    "testing", "debugging", "profiling", "monitoring", "scaling",
]

SIZES = {
    "small": 10,
    "medium": 100,
    "large": 1000,
}


def _generate_section(index: int, lines_per_section: int = 8) -> list[str]:
    """Generate one level-2 section touching every block kind."""
    word = random.choice(TECH_WORDS)
    lines = [f"## {word.title()} {index}", ""]
    for _ in range(lines_per_section):
        other = random.choice(TECH_WORDS)
        lines.append(f"The `{word}` module handles {other} operations, see https://example.com/{other}. {LOREM}")
    lines += [
        "",
        f"### {random.choice(TECH_WORDS).title()} Details",
        "",
        f"- Configuration for `{word}`: {LOREM[:60]}",
        f"1. Run [{word}](https://example.com/{word} \"{word}\")",
        "",
        f"> {LOREM[:80]}",
        "",
        "```",
        f"{word} --flag <value>",
        "```",
        "",
        "| Option | Default | Effect |",
        "|:-------|:-------:|-------:|",
        f"| {word} | on | {LOREM[:30]} |",
        "",
    ]
    return lines


def generate_document(num_sections: int) -> str:
    """Generate a markdown document with num_sections level-2 sections."""
    lines = ["# Benchmark Document", "", LOREM, ""]
    for i in range(num_sections):
        lines.extend(_generate_section(i))
    return "\n".join(lines)


def generate_all():
    """Write one document per size to DATASETS_DIR."""
    DATASETS_DIR.mkdir(parents=True, exist_ok=True)
    for name, sections in SIZES.items():
        path = DATASETS_DIR / f"{name}.md"
        path.write_text(generate_document(sections), encoding="utf-8")
        print(f"{name.title()} dataset: {sections} sections in {path}")


if __name__ == "__main__":
    random.seed(42)  # Reproducible
    generate_all()
    print("All datasets generated.")
