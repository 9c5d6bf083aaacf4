"""Page objects, test-data builders and fixtures for storefront end-to-end tests."""
