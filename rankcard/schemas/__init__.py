"""Pydantic Schemas — normalized card data and response envelopes."""
