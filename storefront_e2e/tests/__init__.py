"""
Live storefront and API tests.

These run against the real deployments named in the configuration and are
skipped unless E2E_LIVE is set:

    E2E_LIVE=1 pytest storefront_e2e/tests -v
"""
