"""
Tests for the intl-region command-line tool.
"""
import json

import pytest

from intl_region.cli import EXIT_FAILURE, EXIT_INVALID, EXIT_SUCCESS, main


class TestListCommand:

    def test_table_output(self, capsys):
        assert main(["list", "subregion", "018"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert out.startswith("Southern Africa: 018 (5)\n")
        assert "South Africa" in out

    def test_alias_is_echoed_in_title(self, capsys):
        assert main(["list", "continent", "AFR"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("Africa: AFR (")

    def test_json_output(self, capsys):
        assert main(["list", "continent", "150", "--locale", "fr", "--format", "json"]) == EXIT_SUCCESS
        payload = json.loads(capsys.readouterr().out)
        assert payload["code"] == "150"
        assert payload["name"] == "Europe"
        assert payload["countries"]["DE"] == "Allemagne"

    def test_csv_output(self, capsys):
        assert main(["list", "subregion", "021", "-f", "csv"]) == EXIT_SUCCESS
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == '"Code","Country"'
        assert '"US","United States"' in lines

    def test_excluded_country_is_not_printed(self, capsys):
        main(["list", "subregion", "014", "-f", "csv"])
        assert '"TF"' not in capsys.readouterr().out

    def test_invalid_code(self, capsys):
        assert main(["list", "continent", "999"]) == EXIT_INVALID
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[ERROR] Invalid continent code: 999" in captured.err

    def test_invalid_code_json(self, capsys):
        assert main(["list", "subregion", "999", "--format", "json"]) == EXIT_INVALID
        payload = json.loads(capsys.readouterr().out)
        assert payload["error"] == "InvalidRegionCodeError"
        assert payload["details"]["region_code"] == "999"

    def test_invalid_type_is_a_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["list", "country", "002"])
        assert exc_info.value.code == EXIT_INVALID

    def test_unknown_format_is_a_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["list", "continent", "002", "--format", "xml"])
        assert exc_info.value.code == EXIT_INVALID

    def test_default_locale_from_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("INTL_REGION_DEFAULT_LOCALE", "de")
        main(["list", "continent", "150", "-f", "json"])
        assert json.loads(capsys.readouterr().out)["countries"]["FR"] == "Frankreich"

    def test_broken_mapping_dir(self, tmp_path, capsys):
        assert main(["--mapping-dir", str(tmp_path), "list", "continent", "002"]) == EXIT_FAILURE
        assert "[ERROR]" in capsys.readouterr().err

    def test_mapping_file_that_is_not_utf8(self, write_mapping_dir, capsys):
        mapping_dir = write_mapping_dir()
        (mapping_dir / "continent.json").write_bytes(b"\xff\xfe garbage")
        assert main(["--mapping-dir", str(mapping_dir), "list", "continent", "002"]) == EXIT_FAILURE
        assert "not valid UTF-8" in capsys.readouterr().err

    def test_invalid_log_level(self, monkeypatch, capsys):
        monkeypatch.setenv("INTL_REGION_LOG_LEVEL", "LOUD")
        assert main(["list", "continent", "002"]) == EXIT_FAILURE
        err = capsys.readouterr().err
        assert "[ERROR] Invalid configuration" in err
        assert "Unknown log level" in err

    def test_invalid_log_level_json(self, monkeypatch, capsys):
        monkeypatch.setenv("INTL_REGION_LOG_LEVEL", "LOUD")
        assert main(["list", "continent", "002", "-f", "json"]) == EXIT_FAILURE
        assert json.loads(capsys.readouterr().out)["error"] == "ConfigurationError"


class TestCheckCommand:

    def test_bundled_data_is_consistent(self, capsys):
        assert main(["check"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("[OK]")

    def test_inconsistent_tables(self, write_mapping_dir, sample_subregions, capsys):
        del sample_subregions["mapping"]["DE"]
        mapping_dir = write_mapping_dir(subregion=sample_subregions)
        assert main(["--mapping-dir", str(mapping_dir), "check"]) == EXIT_FAILURE
        assert "[FAIL] Countries without a subregion: DE" in capsys.readouterr().out

    def test_compare_with_registry_data(self, write_mapping_dir, tmp_path, capsys):
        mapping_dir = write_mapping_dir()
        un_data = tmp_path / "un-m49-data.json"
        un_data.write_text(json.dumps([
            {"iso_alpha2": "KE", "region_code": "002", "subregion_code": "202",
             "intermediate_region_code": "014"},
            {"iso_alpha2": "UG", "region_code": "002", "subregion_code": "202",
             "intermediate_region_code": "014"},
        ]), encoding="utf-8")

        code = main(["--mapping-dir", str(mapping_dir), "check", "--un-data", str(un_data)])

        assert code == EXIT_FAILURE
        assert "[FAIL] Registry countries missing locally: UG" in capsys.readouterr().out

    def test_registry_data_must_be_a_list(self, tmp_path, capsys):
        un_data = tmp_path / "un-m49-data.json"
        un_data.write_text("{}", encoding="utf-8")
        assert main(["check", "--un-data", str(un_data)]) == EXIT_FAILURE
        assert "must be a JSON list" in capsys.readouterr().err
