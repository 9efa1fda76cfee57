import pytest
from pydantic import ValidationError

from idl_parser.config import DEFAULT_MAX_PATH_COMPONENTS, ParserOptions


class TestParserOptions:
    def test_defaults(self):
        options = ParserOptions()
        assert options.max_path_components == DEFAULT_MAX_PATH_COMPONENTS
        assert options.max_input_length is not None

    def test_unbounded(self):
        options = ParserOptions.unbounded()
        assert options.max_input_length is None
        assert options.max_path_components is None
        assert options.max_query_params is None

    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValidationError):
            ParserOptions(max_query_params=0)


class TestFromEnv:
    def test_unset_keeps_defaults(self):
        assert ParserOptions.from_env({}) == ParserOptions()

    def test_reads_values(self):
        options = ParserOptions.from_env({
            "IDL_PARSER_MAX_PATH_COMPONENTS": "8",
            "IDL_PARSER_MAX_QUERY_PARAMS": " 3 ",
        })
        assert options.max_path_components == 8
        assert options.max_query_params == 3

    def test_none_disables_limit(self):
        options = ParserOptions.from_env({
            "IDL_PARSER_MAX_INPUT_LENGTH": "none",
            "IDL_PARSER_MAX_QUERY_PARAMS": "",
        })
        assert options.max_input_length is None
        assert options.max_query_params is None

    def test_invalid_value(self):
        with pytest.raises(ValidationError):
            ParserOptions.from_env({"IDL_PARSER_MAX_INPUT_LENGTH": "lots"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("IDL_PARSER_MAX_PATH_COMPONENTS", "5")
        assert ParserOptions.from_env().max_path_components == 5
