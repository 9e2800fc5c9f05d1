"""Job spec generation and job distributor planning for data streams DONs."""
