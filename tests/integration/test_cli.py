"""
test_cli.py
-----------
Integration tests for the mediameta command line interface.
"""
import pytest
from click.testing import CliRunner

from mediameta.database.cli import cli
from mediameta.database.manager import MediaMetaDB


INGEST_YAML = """\
uid: m-cli-0001
source: meta
taken_at: 2020-05-23T14:02:11Z
taken_at_local: 2020-05-23T16:02:11
time_zone: Europe/Berlin
latitude: 52.5163
longitude: 13.3777
details:
  artist: Jane Doe
labels:
  - {name: dog, uncertainty: 10, priority: 2}
location:
  city: Berlin
  state: Berlin
  country_name: Germany
"""


class TestCli:
    """Integration tests for CLI commands."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def test_dirs(self, tmp_path):
        dirs = {
            "db_path": tmp_path / "test.db",
            "log_dir": tmp_path / "logs",
        }
        dirs["log_dir"].mkdir()
        return dirs

    @pytest.fixture
    def invoke(self, runner, test_dirs):
        def _invoke(*args):
            return runner.invoke(
                cli,
                [
                    "--db-path",
                    str(test_dirs["db_path"]),
                    "--log-dir",
                    str(test_dirs["log_dir"]),
                    *args,
                ],
            )

        return _invoke

    @pytest.fixture
    def ingest_file(self, tmp_path):
        path = tmp_path / "ingest.yaml"
        path.write_text(INGEST_YAML, encoding="utf-8")
        return path

    @pytest.fixture
    def ingested(self, invoke, ingest_file):
        assert invoke("init").exit_code == 0
        result = invoke("ingest", str(ingest_file))
        assert result.exit_code == 0, result.output
        return "m-cli-0001"

    def test_init(self, invoke, test_dirs):
        result = invoke("init")

        assert result.exit_code == 0
        assert "Database initialized! (7 tables)" in result.output
        assert test_dirs["db_path"].exists()

    def test_ingest_and_show(self, invoke, ingested):
        result = invoke("show", ingested)

        assert result.exit_code == 0
        assert "Title: Dog / Berlin / 2020 [auto]" in result.output
        assert "Year/month: 2020/05" in result.output
        assert "Time zone: Europe/Berlin" in result.output
        assert "berlin" in result.output
        assert "jane" in result.output
        assert "Dog (uncertainty 10, priority 2, image)" in result.output

    def test_ingest_writes_logs(self, invoke, ingested, test_dirs):
        content = (test_dirs["log_dir"] / "database.log").read_text(encoding="utf-8")
        assert "reconcile_media_completed" in content

    def test_update_file(self, invoke, ingested, tmp_path):
        path = tmp_path / "update.yaml"
        path.write_text("source: xmp\ndescription: Walk in the park\n", encoding="utf-8")

        result = invoke("update", ingested, str(path))

        assert result.exit_code == 0
        assert "Accepted fields: description" in result.output
        assert "Description: Walk in the park [xmp]" in invoke("show", ingested).output

    def test_update_form_is_manual(self, invoke, ingested, tmp_path):
        path = tmp_path / "form.yaml"
        path.write_text("title: Our trip\n", encoding="utf-8")

        result = invoke("update", ingested, str(path), "--form")

        assert result.exit_code == 0
        assert "Title: Our trip [manual]" in invoke("show", ingested).output

    def test_update_form_merges_labels(self, invoke, ingested, tmp_path):
        path = tmp_path / "form.yaml"
        path.write_text(
            "description: At the zoo\nlabels:\n  - {name: cat, uncertainty: 5, priority: 3}\n",
            encoding="utf-8",
        )

        result = invoke("update", ingested, str(path), "--form")

        assert result.exit_code == 0, result.output
        output = invoke("show", ingested).output
        assert "Cat (uncertainty 5, priority 3, image)" in output
        assert "Title: Cat / Berlin / 2020 [auto]" in output

    def test_place_kept_after_label_update(self, invoke, ingested, tmp_path):
        path = tmp_path / "labels.yaml"
        path.write_text(
            "source: meta\nlabels:\n  - {name: cat, uncertainty: 5, priority: 3}\n",
            encoding="utf-8",
        )

        assert invoke("update", ingested, str(path)).exit_code == 0

        output = invoke("show", ingested).output
        assert "Place: Berlin, Germany" in output
        assert "Title: Cat / Berlin / 2020 [auto]" in output

    def test_invalid_update_file(self, invoke, ingested, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("source: exif\n", encoding="utf-8")

        result = invoke("update", ingested, str(path))

        assert result.exit_code == 1
        assert "ValidationError" in result.output

    def test_reindex(self, invoke, ingested, test_dirs):
        with MediaMetaDB(test_dirs["db_path"]) as db:
            with db.session_scope():
                db.keywords.set_skip("jane")

        result = invoke("reindex", ingested)

        assert result.exit_code == 0
        assert "Reindexed" in result.output
        assert "jane" not in invoke("show", ingested).output

    def test_delete_and_restore(self, invoke, ingested):
        assert invoke("delete", ingested, "--reason", "duplicate").exit_code == 0
        assert invoke("show", ingested).exit_code == 1
        assert "deleted" in invoke("show", ingested, "--deleted").output

        assert invoke("restore", ingested).exit_code == 0
        assert invoke("show", ingested).exit_code == 0

    def test_delete_permanently(self, invoke, ingested):
        result = invoke("delete", ingested, "--permanently")

        assert result.exit_code == 0
        assert "permanently" in result.output
        assert invoke("show", ingested, "--deleted").exit_code == 1

    def test_show_unknown_uid(self, invoke):
        invoke("init")
        result = invoke("show", "m-missing")

        assert result.exit_code == 1
        assert "Media not found: m-missing" in result.output


class TestFolderTitleCli:
    """Tests for the folder-title command."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.mark.parametrize(
        "args,expected",
        [
            (["originals", "2020/05"], "May 2020"),
            (["import", "/2020/05/23"], "May 23, 2020"),
            (["originals", "/2020/05/23 Birthday"], "23 Birthday"),
            (["originals"], "Originals"),
        ],
    )
    def test_titles(self, runner, args, expected):
        result = runner.invoke(cli, ["folder-title", *args])

        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_dates(self, runner):
        result = runner.invoke(cli, ["folder-title", "import", "2020/05/01", "--dates"])
        assert result.output.splitlines() == ["May 1, 2020", "2020-05-01"]
