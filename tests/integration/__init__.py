"""
Integration tests for docshape.

These tests verify that all components work together correctly,
including the processing pipeline, query round trips and saved views.
"""

import pytest


# Integration test markers
integration = pytest.mark.integration
slow = pytest.mark.slow
