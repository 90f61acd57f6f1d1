"""Nucleotide sequence utilities and a text viewer for pairwise alignments."""
