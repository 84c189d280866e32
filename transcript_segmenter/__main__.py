"""Package entry point for ``python -m transcript_segmenter``."""

from transcript_segmenter.cli import main

if __name__ == "__main__":
    main()
