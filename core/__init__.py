"""
core
----

Pure curation engine components:

- run_validations & ValidationFinding:
  Integrity checks over clients, workers and tasks, run as ordered check groups
  through a CheckManager.

- readiness_score & readiness_report:
  Derive a 0-100 readiness score from the validation findings.

- Business rules (CoRunRule, LoadLimitRule, PhaseWindowRule):
  Closed rule union with precondition-checked constructors and priority weights.

- apply_modification:
  Apply AI-produced action objects to one entity collection, returning new data.

- apply_filters:
  Evaluate structured search filters over a collection.

- AppState:
  Immutable snapshot of collections, rules and priorities passed in by the caller.
"""
