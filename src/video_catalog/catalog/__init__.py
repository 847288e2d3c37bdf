"""Catalog logic: filters, pagination, ownership checks, mutations, errors."""
