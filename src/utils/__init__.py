"""
Utils package.

Models Structure:
- All models are Pydantic models (https://docs.pydantic.dev/).
- Trade dates are canonical 'YYYY-MM-DD HH:mm' strings in UTC.
- Trades that have not been persisted carry an 'imp_' prefixed identifier.
- Models serialize to camelCase dictionaries through `to_dict()` and are built
  from them with `from_dict()` (or `model_validate`).
"""
