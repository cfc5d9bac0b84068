"""Comparators, document access and report rendering used by doc_compare."""
