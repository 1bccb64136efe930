"""
Package Comparison Tests

Test suite for the package comparison library.

Test Coverage:
- Registry search paging and detail normalization
- Download statistics and bundle size clients
- Selection manager and selection flow
- Panel batch refresh, failure isolation and stale batch guard
"""
