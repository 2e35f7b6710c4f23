"""Convenience shim to run the Codacy export from a checkout."""

from __future__ import annotations

import sys

from codacy_exporter.pipeline.runner import main as run_pipeline


if __name__ == "__main__":
    run_pipeline(sys.argv[1:])
