"""Tidy text mining and LDA topic classification for review corpora."""
