"""Tests for the generated schema index."""

import pytest

from gql_hookgen.core.config import IndexOptions
from gql_hookgen.core.ir import RunState
from gql_hookgen.core.schema_index import SchemaIndexGenerator


@pytest.fixture
def schema_dir(tmp_path):
    directory = tmp_path / "src/lib/__generated__"
    directory.mkdir(parents=True)
    for name in ("globalTypes", "GetUser", "UpdateUser", "getuser2"):
        (directory / f"{name}.ts").write_text("export type X = {};\n")
    return directory


class TestSchemaIndexGenerator:
    """Tests for SchemaIndexGenerator."""

    def test_writes_sorted_index(self, tmp_path, schema_dir):
        report = SchemaIndexGenerator(IndexOptions(root=tmp_path)).run()

        assert report.state is RunState.DONE
        assert report.indexes == [str(schema_dir / "index.ts")]
        assert (schema_dir / "index.ts").read_text() == (
            "export * from './GetUser';\n"
            "export * from './getuser2';\n"
            "export * from './UpdateUser';\n"
            "export * from './globalTypes';\n"
        )

    def test_existing_index_is_not_reexported(self, tmp_path, schema_dir):
        (schema_dir / "index.ts").write_text("export * from './stale';\n")
        SchemaIndexGenerator(IndexOptions(root=tmp_path)).run()
        content = (schema_dir / "index.ts").read_text()
        assert "'./index'" not in content
        assert "stale" not in content

    def test_hooks_index_is_prepended(self, tmp_path, schema_dir):
        (schema_dir / "hooks").mkdir()
        (schema_dir / "hooks/index.ts").write_text("export * from './useGetUserQuery';\n")
        SchemaIndexGenerator(IndexOptions(root=tmp_path)).run()
        lines = (schema_dir / "index.ts").read_text().splitlines()
        assert lines[0] == "export * from './hooks';"
        assert len(lines) == 5

    def test_idempotent(self, tmp_path, schema_dir):
        SchemaIndexGenerator(IndexOptions(root=tmp_path)).run()
        first = (schema_dir / "index.ts").read_text()
        SchemaIndexGenerator(IndexOptions(root=tmp_path)).run()
        assert (schema_dir / "index.ts").read_text() == first

    def test_missing_schema(self, tmp_path):
        report = SchemaIndexGenerator(IndexOptions(root=tmp_path)).run()
        assert report.discovered == 0
        assert "generate the GraphQL schema first" in report.message
        assert report.indexes == []

    def test_js_extension(self, tmp_path):
        directory = tmp_path / "generated"
        directory.mkdir()
        (directory / "types.js").write_text("")
        (directory / "types.ts").write_text("")
        SchemaIndexGenerator(IndexOptions(root=tmp_path, extension="js", schema_dir="generated")).run()
        assert (directory / "index.js").read_text() == "export * from './types';\n"
        assert not (directory / "index.ts").exists()
