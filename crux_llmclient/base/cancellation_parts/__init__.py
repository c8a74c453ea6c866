"""One-class-per-file implementations behind ``crux_llmclient.base.cancellation``."""
