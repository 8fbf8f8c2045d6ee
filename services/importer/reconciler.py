import logging

from schemas.import_models import ImportDetails, ImportErrorDetail, ImportResponse
from services.db import campus_is_active
from services.importer.classifier import is_duplicate
from services.importer.errors import CampusNotFoundError, FeatureImportError
from services.importer.extractor import load_feature_collection

logger = logging.getLogger(__name__)

UNKNOWN_NAME = 'Unknown'


class ImportTally:
    """Running counts for one import run. Every feature lands in exactly one bucket."""

    def __init__(self):
        self.total = 0
        self.imported = []
        self.duplicates = []
        self.errors = []

    def add_imported(self, name: str):
        self.total += 1
        self.imported.append(name)

    def add_duplicate(self, name: str):
        self.total += 1
        self.duplicates.append(name)

    def add_error(self, name: str, error: str):
        self.total += 1
        self.errors.append(ImportErrorDetail(name=name or UNKNOWN_NAME, error=error))

    def to_response(self) -> ImportResponse:
        return ImportResponse(
            total=self.total,
            imported=len(self.imported),
            duplicates=len(self.duplicates),
            errors=len(self.errors),
            details=ImportDetails(
                imported=list(self.imported),
                duplicates=list(self.duplicates),
                errors=list(self.errors),
            ),
        )


class ImportReconciler:
    """Imports the features of a GeoJSON FeatureCollection into one campus.

    `adapter` supplies the per-kind behaviour (see services.importer.adapters);
    `campus_lookup(campus_id) -> bool` tells whether the campus exists and is
    active. Features are processed one at a time in document order, so a
    feature whose name repeats an earlier one in the same file is reported
    as a duplicate.
    """

    def __init__(self, adapter, campus_lookup=campus_is_active):
        self.adapter = adapter
        self.campus_lookup = campus_lookup

    def run(self, source, campus_id: str) -> ImportResponse:
        collection = load_feature_collection(source)
        if not campus_id or not self.campus_lookup(campus_id):
            raise CampusNotFoundError(campus_id)

        features = collection['features']
        logger.info("Importing %d %s feature(s) into campus %s", len(features), self.adapter.kind, campus_id)

        tally = ImportTally()
        for index, feature in enumerate(features):
            self._process(feature, index, campus_id, tally)

        result = tally.to_response()
        logger.info(
            "Import of %s into campus %s done: %d imported, %d duplicate(s), %d error(s)",
            self.adapter.kind, campus_id, result.imported, result.duplicates, result.errors,
        )
        return result

    def _process(self, feature, index: int, campus_id: str, tally: ImportTally):
        try:
            candidate = self.adapter.extract(feature, index, campus_id)
            if is_duplicate(self.adapter, candidate):
                tally.add_duplicate(candidate.name)
                return
            self.adapter.persist(candidate)
        except FeatureImportError as e:
            name = e.name or self.adapter.name_of(feature)
            logger.warning("Feature %d (%s) not imported: %s", index, name or UNKNOWN_NAME, e.reason)
            tally.add_error(name, e.reason)
            return
        tally.add_imported(candidate.name)


def import_features(adapter, source, campus_id: str, campus_lookup=campus_is_active) -> ImportResponse:
    return ImportReconciler(adapter, campus_lookup=campus_lookup).run(source, campus_id)
