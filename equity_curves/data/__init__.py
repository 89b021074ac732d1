"""
Row schemas and tabular views of simulation output.

Defines the external row contract for trade records and converts record lists
into pandas DataFrames for in-memory inspection.
"""
