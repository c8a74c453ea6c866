"""Models parts package.

One-class-per-file value objects re-exported by ``crux_llmclient.base.models``.
"""
