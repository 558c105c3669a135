"""In-memory host document: filtering, parameters, transactions."""

import pytest

from scopemap_host import HostConfig, InMemoryDocument
from scopemap_zone import (
    Category,
    ClassifierBuilder,
    MissingFieldError,
    ReadOnlyError,
)


def make_document(quiet_logger, config=None, **overrides):
    data = {
        "elements": [
            {
                "element_id": "c1",
                "category": "linear_conduit",
                "phase": "electrical",
                "parameters": {"SKU": None},
                "geometry": {"point": [1, 1, 1]},
            },
            {
                "element_id": "f1",
                "category": "conduit_fitting",
                "phase": "Electrical",
                "parameters": {},
                "geometry": {"point": [2, 2, 2]},
            },
            {
                "element_id": "x1",
                "category": "point_fixture",
                "phase": "Electrical",
                "parameters": {"SKU": {"value": "OLD", "read_only": True}},
                "geometry": {"point": [3, 3, 3]},
            },
            {
                "element_id": "m1",
                "category": "linear_conduit",
                "phase": "Mechanical",
                "parameters": {"SKU": None},
                "geometry": {"point": [4, 4, 4]},
            },
            {
                "element_id": "o1",
                "category": "other",
                "phase": "Electrical",
                "parameters": {"SKU": None},
            },
        ],
        "volumes": [
            {"name": "Bay-1", "category": "Scope Boxes", "box": {"min": [0, 0, 0], "max": [10, 10, 10]}},
            {"name": "Unplaced", "category": "Scope Boxes"},
            {"name": "Grid A", "category": "Grids", "box": {"min": [0, 0, 0], "max": [1, 1, 1]}},
            {"name": "Bay-2", "category": "scope boxes", "box": {"min": [20, 0, 0], "max": [30, 10, 10]}},
        ],
    }
    data.update(overrides)
    return InMemoryDocument.from_dict(data, config=config, logger=quiet_logger)


def element(document, element_id):
    return next(e for e in document.provide_elements() if e.element_id == element_id)


class TestSources:

    def test_elements_are_filtered_by_phase_and_category(self, quiet_logger):
        document = make_document(quiet_logger)
        assert [e.element_id for e in document.provide_elements()] == ["c1", "f1", "x1"]

    def test_unknown_phase_yields_no_elements(self, quiet_logger):
        document = make_document(quiet_logger, config=HostConfig(phase_name="Demolition"))
        assert document.provide_elements() == []

    def test_category_filter_is_configurable(self, quiet_logger):
        config = HostConfig(categories=(Category.LINEAR_CONDUIT, Category.OTHER))
        document = make_document(quiet_logger, config=config)
        assert [e.element_id for e in document.provide_elements()] == ["c1", "o1"]

    def test_zones_are_boxed_volumes_of_zone_category_in_order(self, quiet_logger):
        document = make_document(quiet_logger)
        assert [z.label for z in document.provide_zones()] == ["Bay-1", "Bay-2"]

    def test_zone_category_is_configurable(self, quiet_logger):
        document = make_document(quiet_logger, config=HostConfig(zone_category="grids"))
        assert [z.label for z in document.provide_zones()] == ["Grid A"]


class TestWrites:

    def test_writability_follows_parameter_state(self, quiet_logger):
        document = make_document(quiet_logger)
        assert document.is_writable(element(document, "c1"))
        assert not document.is_writable(element(document, "f1"))
        assert not document.is_writable(element(document, "x1"))

    def test_write_requires_transaction(self, quiet_logger):
        document = make_document(quiet_logger)
        with pytest.raises(RuntimeError):
            document.write_label(element(document, "c1"), "Bay-1")

    def test_write_errors(self, quiet_logger):
        document = make_document(quiet_logger)
        with document.transaction():
            with pytest.raises(MissingFieldError):
                document.write_label(element(document, "f1"), "Bay-1")
            with pytest.raises(ReadOnlyError):
                document.write_label(element(document, "x1"), "Bay-1")

    def test_commit_makes_writes_visible(self, quiet_logger):
        document = make_document(quiet_logger)
        with document.transaction():
            document.write_label(element(document, "c1"), "Bay-1")
            assert document.parameter_value("c1") is None
        assert document.parameter_value("c1") == "Bay-1"
        assert not document.in_transaction

    def test_exception_rolls_back(self, quiet_logger):
        document = make_document(quiet_logger)
        with pytest.raises(KeyError):
            with document.transaction():
                document.write_label(element(document, "c1"), "Bay-1")
                raise KeyError("boom")
        assert document.parameter_value("c1") is None
        assert not document.in_transaction

    def test_nested_transactions_are_rejected(self, quiet_logger):
        document = make_document(quiet_logger)
        with document.transaction():
            with pytest.raises(RuntimeError):
                with document.transaction():
                    pass


def test_full_pass_through_document(quiet_logger):
    document = make_document(quiet_logger)
    classifier = ClassifierBuilder().with_writer(document).with_logger(quiet_logger).build()

    with document.transaction():
        report = classifier.run_from_sources(document, document)

    assert report.total == 3
    assert report.tally(Category.LINEAR_CONDUIT).written == 1
    assert report.tally(Category.CONDUIT_FITTING).skipped == 1
    assert report.tally(Category.POINT_FIXTURE).skipped == 1
    assert document.parameter_value("c1") == "Bay-1"
    assert document.parameter_value("x1") == "OLD"
    assert document.parameter_value("m1") is None


def test_sample_document_loads(sample_document_path, quiet_logger):
    document = InMemoryDocument.from_yaml(sample_document_path, logger=quiet_logger)
    assert [z.label for z in document.provide_zones()] == ["Bay-1", "Bay-2"]
    assert [e.element_id for e in document.provide_elements()] == [1001, 1002, 1003]


def test_duplicate_element_ids_are_rejected(quiet_logger):
    duplicate = {"element_id": "a", "category": "other", "phase": "Electrical"}
    with pytest.raises(ValueError, match="unique"):
        InMemoryDocument.from_dict({"elements": [duplicate, duplicate]}, logger=quiet_logger)


def test_missing_document_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        InMemoryDocument.from_yaml(tmp_path / "nope.yaml")


@pytest.mark.parametrize("data, match", [
    (["not", "a", "mapping"], "expected a mapping"),
    ({"elements": "c1"}, "'elements' must be a list"),
    ({"elements": ["c1"]}, "Invalid element entry"),
    ({"elements": [{"element_id": "c1", "parameters": ["SKU"]}]}, "Invalid parameters"),
    ({"elements": [{"element_id": "c1", "geometry": [1, 2, 3]}]}, "Invalid geometry"),
    ({"volumes": [["Bay-1"]]}, "Invalid volume entry"),
    ({"volumes": [{"name": "Bay-1", "box": [0, 10]}]}, "Invalid box"),
])
def test_malformed_document_data(data, match):
    with pytest.raises(ValueError, match=match):
        InMemoryDocument.from_dict(data)


def test_malformed_yaml_names_the_file(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="Invalid document in .*list.yaml"):
        InMemoryDocument.from_yaml(path)
