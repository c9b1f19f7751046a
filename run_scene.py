"""Lightweight launcher for the sky scene.

This should remain small and delegate to `skyscene.main`.
"""
import sys
from pathlib import Path


if __name__ == "__main__":
    # allow running from a source checkout without installing
    sys.path.insert(0, str(Path(__file__).parent / "src"))
    from skyscene.main import main

    main()
