"""Infrastructure: tokenizer and configuration file adapter."""
