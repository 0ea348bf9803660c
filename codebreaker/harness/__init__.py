from .core import run_case, run_batch, query_bound, summarize, pretty_stats
from .io import write_csv, write_manifest

__all__ = ["run_case", "run_batch", "query_bound", "summarize", "pretty_stats",
           "write_csv", "write_manifest"]
