"""Online (streaming) accumulators."""
