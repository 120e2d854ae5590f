"""
Data loading and corpus utilities.

This subpackage provides:
- functions to load the data configuration and label mapping
- helpers to list and read document files from spam/ham corpus
  directories, and to load a labeled corpus into a DataFrame.
"""
