"""Core segmentation pipeline: IR, enrichment, scoring, merging."""
