"""Secret handling for outbound calls and logs."""
