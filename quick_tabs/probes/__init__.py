"""Browser detection probes."""
