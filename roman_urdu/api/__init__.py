"""HTTP binding: thin Flask forwarders over the public operations."""
