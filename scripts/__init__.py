"""Command-line maintenance scripts for the Herbapedia corpus.

Each module is runnable directly (``python scripts/validate_corpus.py``) and
exposes ``main(argv)`` returning the process exit status.
"""
