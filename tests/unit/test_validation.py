"""
Unit tests for input validation

Tests the InputValidator class and the ordering of validate_get_options.
"""

import pytest

from edge_snapshot.exceptions import (
    InvalidOutputFormat,
    InvalidSelectorSyntax,
    MultipleNamesWithAllType,
    StoreUnavailable,
    UnrecognizedResourceType,
    ValidationError,
)
from edge_snapshot.models import GetOptions, OutputFormat
from edge_snapshot.store import InMemoryMetaStore
from edge_snapshot.validation import InputValidator, validate_get_options


class RecordingStore(InMemoryMetaStore):
    """Memory store that remembers whether it was closed"""

    def __init__(self):
        super().__init__()
        self.closed = False

    def close(self):
        self.closed = True


class TestResourceTypeValidation:
    """Tests for resource type validation"""

    def test_valid_types(self):
        for resource_type in ["po", "pod", "svc", "cm", "ep", "secret", "node", "all"]:
            assert InputValidator.validate_resource_type(resource_type) == resource_type

    def test_missing_type(self):
        with pytest.raises(ValidationError, match="must specify the type"):
            InputValidator.validate_resource_type("")

    def test_unknown_type(self):
        with pytest.raises(UnrecognizedResourceType, match="Unrecognized resource type: widget"):
            InputValidator.validate_resource_type("widget")


class TestOutputFormatValidation:
    """Tests for output format validation"""

    @pytest.mark.parametrize("value,expected", [
        ("", OutputFormat.TABLE),
        ("wide", OutputFormat.WIDE),
        ("JSON", OutputFormat.JSON),
        ("Yaml", OutputFormat.YAML),
    ])
    def test_accepted_formats(self, value, expected):
        assert InputValidator.validate_output_format(value) == expected

    def test_rejected_format(self):
        with pytest.raises(InvalidOutputFormat, match="yaml|json|wide"):
            InputValidator.validate_output_format("xml")


class TestNamesValidation:
    """Tests for names combined with 'all'"""

    def test_all_with_name(self):
        with pytest.raises(MultipleNamesWithAllType):
            InputValidator.validate_names("all", ["nginx"])

    def test_all_without_names(self):
        assert InputValidator.validate_names("all", []) == []

    def test_names_with_concrete_type(self):
        assert InputValidator.validate_names("pod", ["a", "b"]) == ["a", "b"]


class TestStorePathValidation:
    """Tests for the store path check"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(StoreUnavailable, match="is not available"):
            InputValidator.validate_store_path(str(tmp_path / "missing.db"))

    def test_empty_path(self):
        with pytest.raises(StoreUnavailable):
            InputValidator.validate_store_path("")


class TestValidateGetOptions:
    """Tests for the full validation sequence"""

    def test_unrecognized_type_never_opens_store(self, tmp_path):
        """Test a bad type fails before any store access"""
        opened = []
        options = GetOptions(resource_type="widget", store_path=str(tmp_path / "missing.db"))

        with pytest.raises(UnrecognizedResourceType):
            validate_get_options(options, open_store=opened.append)
        assert opened == []

    def test_missing_store_never_opens_store(self, tmp_path):
        opened = []
        options = GetOptions(resource_type="pod", store_path=str(tmp_path / "missing.db"))

        with pytest.raises(StoreUnavailable):
            validate_get_options(options, open_store=opened.append)
        assert opened == []

    def test_returns_open_store_and_normalizes_format(self, tmp_path):
        path = tmp_path / "edgecore.db"
        path.touch()
        store = RecordingStore()
        options = GetOptions(resource_type="pod", output_format="JSON", store_path=str(path))

        assert validate_get_options(options, open_store=lambda _: store) is store
        assert options.output_format == "json"
        assert not store.closed

    @pytest.mark.parametrize("overrides,error", [
        ({"output_format": "xml"}, InvalidOutputFormat),
        ({"resource_type": "all", "names": ["x"]}, MultipleNamesWithAllType),
        ({"selector": "a=b=c"}, InvalidSelectorSyntax),
    ])
    def test_later_failures_close_store(self, tmp_path, overrides, error):
        """Test the store is released when a check after opening fails"""
        path = tmp_path / "edgecore.db"
        path.touch()
        store = RecordingStore()
        fields = {"resource_type": "pod", "store_path": str(path)}
        fields.update(overrides)

        with pytest.raises(error):
            validate_get_options(GetOptions(**fields), open_store=lambda _: store)
        assert store.closed
