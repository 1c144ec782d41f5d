"""Document transports and the status publisher."""
