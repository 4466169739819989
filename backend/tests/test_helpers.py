import uuid

import pytest
from jose import jwt
from sqlalchemy import Column, Index, MetaData, String, Table, Text
from sqlalchemy.dialects import postgresql

from app.auth import decode_owner_id
from app.config import settings
from app.db.base import include_object
from app.errors import ConflictError, UnauthorizedError
from app.models.project import Project
from app.models.project_file import ProjectFile, detect_language
from app.schemas.project_file import ProjectFileSeed
from app.services.file_service import build_seed_files, locked_file_ids, renamed_path

from conftest import make_token


class TestDetectLanguage:

    def test_known_extensions(self):
        assert detect_language("main.js") == "javascript"
        assert detect_language("Main.JSX") == "javascript"
        assert detect_language("theme.css") == "css"

    def test_unknown_extension_keeps_current(self):
        assert detect_language("notes.txt", "markdown") == "markdown"
        assert detect_language("Makefile") == "plaintext"


class TestRenamedPath:

    @pytest.mark.parametrize(
        "path, name, expected",
        [
            ("/src/a.js", "b.js", "/src/b.js"),
            ("a.js", "b.js", "b.js"),
            ("/src/components/Button.jsx", "Icon.jsx", "/src/components/Icon.jsx"),
        ],
    )
    def test_replaces_last_segment(self, path, name, expected):
        assert renamed_path(path, name) == expected

    def test_name_with_backslash_is_literal(self):
        assert renamed_path("/src/a.js", r"b\1.js") == r"/src/b\1.js"


class TestBuildSeedFiles:

    def test_links_children_to_seeded_folders(self):
        project_id = uuid.uuid4()
        files = build_seed_files(
            project_id,
            [
                ProjectFileSeed(name="Button.jsx", path="/src/ui/Button.jsx", type="file"),
                ProjectFileSeed(name="ui", path="/src/ui", type="folder"),
                ProjectFileSeed(name="src", path="/src", type="folder"),
            ],
        )
        by_path = {f.path: f for f in files}
        assert by_path["/src"].parent_id is None
        assert by_path["/src"].is_root is True
        assert by_path["/src/ui"].parent_id == by_path["/src"].id
        assert by_path["/src/ui/Button.jsx"].parent_id == by_path["/src/ui"].id
        assert all(f.project_id == project_id for f in files)

    def test_orphan_entries_become_roots(self):
        files = build_seed_files(uuid.uuid4(), [ProjectFileSeed(name="a.js", path="/lib/a.js", type="file")])
        assert files[0].is_root is True
        assert files[0].parent_id is None

    def test_duplicate_paths(self):
        with pytest.raises(ConflictError):
            build_seed_files(
                uuid.uuid4(),
                [
                    ProjectFileSeed(name="a.js", path="/a.js", type="file"),
                    ProjectFileSeed(name="a.js", path=" /a.js ", type="file"),
                ],
            )


class TestDecodeOwnerId:

    def test_valid_token(self):
        assert decode_owner_id(make_token("user-1")) == "user-1"

    def test_wrong_secret(self):
        token = jwt.encode({settings.jwt_user_claim: "user-1"}, "other-secret", algorithm=settings.jwt_algorithm)
        with pytest.raises(UnauthorizedError):
            decode_owner_id(token)

    def test_missing_claim(self):
        token = jwt.encode({"sub": "user-1"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
        with pytest.raises(UnauthorizedError):
            decode_owner_id(token)


class TestSchema:

    @pytest.mark.parametrize(
        "column",
        [ProjectFile.__table__.c.name, ProjectFile.__table__.c.path, Project.__table__.c.owner_id],
    )
    def test_unbounded_text_columns(self, column):
        assert isinstance(column.type, Text)

    def test_file_list_read_locks_project_row(self):
        sql = str(locked_file_ids(uuid.uuid4()).compile(dialect=postgresql.dialect()))
        assert sql.rstrip().endswith("FOR UPDATE")


class TestMigrationFilter:

    @pytest.mark.parametrize("name", ["projects", "project_files"])
    def test_mapped_tables_included(self, name):
        assert include_object(None, name, "table", True, None) is True

    def test_foreign_table_excluded(self):
        assert include_object(None, "pages", "table", True, None) is False

    def test_index_follows_its_table(self):
        pages = Table("pages", MetaData(), Column("slug", String))
        foreign = Index("ix_pages_slug", pages.c.slug)
        ours = next(iter(ProjectFile.__table__.indexes))
        assert include_object(foreign, foreign.name, "index", True, None) is False
        assert include_object(ours, ours.name, "index", False, None) is True
