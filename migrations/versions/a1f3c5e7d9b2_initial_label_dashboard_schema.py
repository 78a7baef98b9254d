"""initial label dashboard schema

Revision ID: a1f3c5e7d9b2
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "a1f3c5e7d9b2"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "brand",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("brand_name", sa.String(length=255), nullable=False),
        sa.Column("logo_url", sa.String(length=255), nullable=True),
        sa.Column("brand_color", sa.String(length=45), nullable=False, server_default="#ffffff"),
        sa.Column("brand_website", sa.String(length=255), nullable=True),
        sa.Column("favicon_url", sa.String(length=255), nullable=True),
        sa.Column("parent_brand", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["parent_brand"], ["brand.id"]),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "domain",
        sa.Column("brand_id", sa.Integer(), nullable=False),
        sa.Column("domain_name", sa.String(length=255), nullable=False),
        sa.Column(
            "status",
            sa.Enum("Verified", "Unverified", "Pending", "Connected", "No SSL", name="domain_status"),
            nullable=True,
            server_default="Unverified",
        ),
        sa.ForeignKeyConstraint(["brand_id"], ["brand.id"]),
        sa.PrimaryKeyConstraint("brand_id", "domain_name"),
    )
    with op.batch_alter_table("domain", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_domain_domain_name"), ["domain_name"], unique=False)

    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=45), nullable=True),
        sa.Column("email_address", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=45), nullable=True),
        sa.Column("last_name", sa.String(length=45), nullable=True),
        sa.Column("password_md5", sa.String(length=255), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_system_user", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("brand_id", sa.Integer(), nullable=True),
        sa.Column("reset_hash", sa.String(length=255), nullable=True),
        sa.Column("last_logged_in", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["brand_id"], ["brand.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("user", schema=None) as batch_op:
        batch_op.create_index("idx_user_system_email", ["is_system_user", "email_address"], unique=False)
        batch_op.create_index("idx_user_system_brand", ["is_system_user", "brand_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_user_reset_hash"), ["reset_hash"], unique=False)

    op.create_table(
        "login_attempt",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.Enum("Successful", "Failed", name="login_status"), nullable=False),
        sa.Column("date_and_time", sa.DateTime(), nullable=False),
        sa.Column("brand_id", sa.Integer(), nullable=True),
        sa.Column("proxy_ip", sa.String(length=45), nullable=True),
        sa.Column("remote_ip", sa.String(length=45), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("login_attempt", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_login_attempt_user_id"), ["user_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_login_attempt_date_and_time"), ["date_and_time"], unique=False)

    op.create_table(
        "email_attempt",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("recipients", sa.Text(), nullable=False),
        sa.Column("subject", sa.String(length=500), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("result", sa.Enum("Success", "Failed", name="email_result"), nullable=False),
        sa.Column("brand_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["brand_id"], ["brand.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("email_attempt", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_email_attempt_brand_id"), ["brand_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_email_attempt_timestamp"), ["timestamp"], unique=False)
        batch_op.create_index(batch_op.f("ix_email_attempt_result"), ["result"], unique=False)

    op.create_table(
        "artist",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("brand_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["brand_id"], ["brand.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("artist", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_artist_brand_id"), ["brand_id"], unique=False)

    op.create_table(
        "artist_access",
        sa.Column("artist_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("can_view_payments", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("can_view_royalties", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("can_edit_artist_profile", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("status", sa.Enum("Pending", "Accepted", name="access_status"), nullable=False, server_default="Pending"),
        sa.Column("invite_hash", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(["artist_id"], ["artist.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("artist_id", "user_id"),
    )
    with op.batch_alter_table("artist_access", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_artist_access_invite_hash"), ["invite_hash"], unique=False)

    op.create_table(
        "songwriter",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("pro_affiliation", sa.String(length=100), nullable=True),
        sa.Column("ipi_number", sa.String(length=20), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", "pro_affiliation", "ipi_number", name="unique_songwriter"),
    )

    op.create_table(
        "event",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("brand_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("date_and_time", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["brand_id"], ["brand.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("event", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_event_brand_id"), ["brand_id"], unique=False)

    op.create_table(
        "ticket_type",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("max_tickets", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("start_date", sa.DateTime(), nullable=True),
        sa.Column("end_date", sa.DateTime(), nullable=True),
        sa.Column("disabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("special_instructions", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["event_id"], ["event.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("ticket_type", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_ticket_type_event_id"), ["event_id"], unique=False)

    op.create_table(
        "ticket",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("ticket_type_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("email_address", sa.String(length=255), nullable=True),
        sa.Column("number_of_entries", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("status", sa.String(length=45), nullable=False, server_default="New"),
        sa.ForeignKeyConstraint(["event_id"], ["event.id"]),
        sa.ForeignKeyConstraint(["ticket_type_id"], ["ticket_type.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("ticket", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_ticket_event_id"), ["event_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_ticket_ticket_type_id"), ["ticket_type_id"], unique=False)

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("action", sa.String(length=80), nullable=False),
        sa.Column("entity", sa.String(length=80), nullable=True),
        sa.Column("entity_id", sa.String(length=80), nullable=True),
        sa.Column("ip", sa.String(length=64), nullable=True),
        sa.Column("proxy_ip", sa.String(length=255), nullable=True),
        sa.Column("user_agent", sa.String(length=255), nullable=True),
        sa.Column("metadata_json", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("audit_logs", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_audit_logs_timestamp"), ["timestamp"], unique=False)

    op.create_table(
        "rate_limit_buckets",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("bucket_key", sa.String(length=128), nullable=False),
        sa.Column("window_start", sa.DateTime(), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("rate_limit_buckets", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_rate_limit_buckets_bucket_key"), ["bucket_key"], unique=True)


def downgrade():
    op.drop_table("rate_limit_buckets")
    op.drop_table("audit_logs")
    op.drop_table("ticket")
    op.drop_table("ticket_type")
    op.drop_table("event")
    op.drop_table("songwriter")
    op.drop_table("artist_access")
    op.drop_table("artist")
    op.drop_table("email_attempt")
    op.drop_table("login_attempt")
    op.drop_table("user")
    op.drop_table("domain")
    op.drop_table("brand")
