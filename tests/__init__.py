"""lightform test suite.

Test organization:
- test_field.py: Field record and the emptiness predicate
- test_validation.py: Validation engine (required check, patterns, sync and async rules)
- test_form_state.py: Form registry, mutations, scheduling and notifications
- test_settings.py: .lightform.yaml settings loading
- test_logging.py: Logging helpers
- test_errors.py: Exception hierarchy
"""
