"""REST clients for Ensembl and UniProt."""
