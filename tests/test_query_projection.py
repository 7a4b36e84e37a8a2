from agent_lab.queries import Projection


def _users() -> Projection:
    return (
        Projection("public", "users", "u")
        .project("id", "ID")
        .project("email", "Email")
        .project("created_at", "CreatedAt")
    )


def test_projection_table_and_alias():
    projection = Projection("public", "users", "u")
    assert projection.alias == "u"
    assert projection.schema == "public"
    assert projection.table == "public.users u"


def test_projection_column_qualifies_registered_names():
    projection = _users()
    assert projection.column("ID") == "u.id"
    assert projection.column("Email") == "u.email"
    assert projection.column("CreatedAt") == "u.created_at"


def test_projection_column_passes_unknown_names_through():
    projection = _users()
    assert projection.column("Unknown") == "Unknown"
    assert projection.column("lower(u.email)") == "lower(u.email)"


def test_projection_columns_follow_registration_order():
    projection = _users()
    assert projection.columns() == "u.id, u.email, u.created_at"
    assert projection.column_list() == ["u.id", "u.email", "u.created_at"]
    assert projection.names() == ["ID", "Email", "CreatedAt"]


def test_projection_reregistration_replaces_column_in_place():
    projection = _users().project("email_address", "Email")
    assert projection.column("Email") == "u.email_address"
    assert projection.columns() == "u.id, u.email_address, u.created_at"
    assert len(projection) == 3


def test_projection_project_does_not_mutate_shared_instance():
    base = _users()
    extended = base.project("name", "Name")

    assert "Name" in extended
    assert "Name" not in base
    assert base.column("Name") == "Name"
    assert base.columns() == "u.id, u.email, u.created_at"


def test_empty_projection_has_no_columns():
    projection = Projection("public", "users", "u")
    assert projection.columns() == ""
    assert projection.column_list() == []
