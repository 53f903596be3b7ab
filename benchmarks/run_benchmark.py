"""
Reproducible benchmark harness for mdnav MCP.

Measures, per document size:
- Markdown to HTML conversion
- Navigation tree extraction
- Breadcrumb resolution for the last heading
- Sanitization of the converted HTML
- The full render_markdown tool

Conversion cost should grow linearly with document size, so the
"us_per_kb" column should stay roughly flat across datasets.

Usage:
    python benchmarks/run_benchmark.py [--dataset small|medium|large|all] [--output results.json]
"""

import argparse
import json
import platform
import sys
import time
from pathlib import Path

# Add project src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mdnav_mcp.parser.hierarchy import extract_nav, flatten_tree, get_path_to_item
from mdnav_mcp.parser.markdown import parse_markdown
from mdnav_mcp.security import sanitize_html
from mdnav_mcp.tools.render_markdown import render_markdown


class BenchmarkResult:
    """Collects benchmark measurements."""

    def __init__(self, dataset_name: str, size_bytes: int):
        self.dataset = dataset_name
        self.size_bytes = size_bytes
        self.measurements: list[dict] = []
        self.system_info = {
            "platform": platform.system(),
            "platform_version": platform.version(),
            "python_version": platform.python_version(),
            "processor": platform.processor(),
        }

    def record(self, name: str, elapsed_ms: float, **extra):
        kb = max(self.size_bytes / 1024, 1e-9)
        self.measurements.append({
            "name": name,
            "elapsed_ms": round(elapsed_ms, 3),
            "us_per_kb": round(elapsed_ms * 1000 / kb, 2),
            **extra,
        })

    def to_dict(self) -> dict:
        return {
            "dataset": self.dataset,
            "size_bytes": self.size_bytes,
            "system_info": self.system_info,
            "measurements": self.measurements,
        }

    def to_markdown(self) -> str:
        lines = [
            f"# Benchmark Results: {self.dataset} ({self.size_bytes} bytes)",
            "",
            f"**Platform**: {self.system_info['platform']} {self.system_info['platform_version']}",
            f"**Python**: {self.system_info['python_version']}",
            "",
            "| Measurement | Time (ms) | us/KB | Details |",
            "|-------------|-----------|-------|---------|",
        ]
        for m in self.measurements:
            extra = {k: v for k, v in m.items() if k not in ("name", "elapsed_ms", "us_per_kb")}
            details = ", ".join(f"{k}={v}" for k, v in extra.items()) if extra else "-"
            lines.append(f"| {m['name']} | {m['elapsed_ms']} | {m['us_per_kb']} | {details} |")
        return "\n".join(lines)


def _timed(func, *args, repeat: int = 5, **kwargs):
    """Return (best elapsed ms, result) over repeat calls."""
    best = float("inf")
    result = None
    for _ in range(repeat):
        t0 = time.perf_counter()
        result = func(*args, **kwargs)
        best = min(best, (time.perf_counter() - t0) * 1000)
    return best, result


def run_benchmark(dataset_path: Path) -> BenchmarkResult:
    """Run the benchmark suite on one document."""
    content = dataset_path.read_text(encoding="utf-8")
    result = BenchmarkResult(dataset_path.stem, len(content.encode("utf-8")))

    elapsed, html = _timed(parse_markdown, content)
    result.record("parse_markdown", elapsed, html_bytes=len(html))

    elapsed, tree = _timed(extract_nav, html)
    flat = flatten_tree(tree)
    result.record("extract_nav", elapsed, heading_count=len(flat))

    if flat:
        target = flat[-1][0].id
        elapsed, path = _timed(get_path_to_item, tree, target)
        result.record("get_path_to_item", elapsed, path_length=len(path))

    elapsed, _ = _timed(sanitize_html, html)
    result.record("sanitize_html", elapsed)

    elapsed, _ = _timed(render_markdown, content)
    result.record("render_markdown", elapsed)

    return result


def main():
    parser = argparse.ArgumentParser(description="mdnav MCP Benchmark")
    parser.add_argument("--dataset", choices=["small", "medium", "large", "all"], default="all")
    parser.add_argument("--output", default=None, help="Output JSON file path")
    parser.add_argument("--generate", action="store_true", help="Generate datasets first")
    args = parser.parse_args()

    datasets_dir = Path(__file__).parent / "datasets"

    if args.generate or not datasets_dir.exists():
        print("Generating benchmark datasets...")
        from generate_datasets import generate_all
        import random
        random.seed(42)
        generate_all()

    if args.dataset == "all":
        dataset_names = ["small", "medium", "large"]
    else:
        dataset_names = [args.dataset]

    all_results = []

    for name in dataset_names:
        dataset_path = datasets_dir / f"{name}.md"
        if not dataset_path.exists():
            print(f"Dataset {name} not found at {dataset_path}. Run with --generate first.")
            continue

        print(f"\nBenchmarking dataset: {name}")
        print("=" * 50)

        result = run_benchmark(dataset_path)
        all_results.append(result)

        print(result.to_markdown())
        print()

    # Output JSON
    if args.output:
        output_data = [r.to_dict() for r in all_results]
        with open(args.output, "w") as f:
            json.dump(output_data, f, indent=2)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
