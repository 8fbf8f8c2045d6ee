"""Exceptions raised by the GeoJSON import pipeline.

Two levels:

- ImportRejectedError: fatal, raised before any feature is processed
  (bad document, unknown campus). Nothing is persisted.
- FeatureImportError: scoped to one feature. The reconciler records it in the
  tally and moves on to the next feature.
"""


class ImportRejectedError(Exception):
    pass


class GeoJSONFormatError(ImportRejectedError):
    pass


class CampusNotFoundError(ImportRejectedError):
    def __init__(self, campus_id):
        self.campus_id = campus_id
        super().__init__(f"Campus with ID {campus_id} not found or inactive")


class FeatureImportError(Exception):
    def __init__(self, reason: str, name: str = None):
        self.reason = reason
        self.name = name
        super().__init__(reason)


class ExtractionError(FeatureImportError):
    def __init__(self, feature_index: int, reason: str, name: str = None):
        self.feature_index = feature_index
        super().__init__(reason, name=name)

    def __str__(self):
        return f"feature {self.feature_index}: {self.reason}"


class PersistenceError(FeatureImportError):
    pass
