"""policyspec application layer: parser, schema, validators, reporters."""
