"""Configuration-driven extraction of visual graph models from RDF triples."""
