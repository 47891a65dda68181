"""Initial community hub schema

Revision ID: 3c1a9e5d7b20
Revises:
Create Date: 2026-10-17 09:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c1a9e5d7b20'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    ]


def _media_columns():
    return [
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("submission_id", sa.String(255), sa.ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_email", sa.String(255), nullable=False),
        sa.Column("file_name", sa.String(500), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("mime_type", sa.String(100), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("password", sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "admins",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("admin_role", sa.String(50), nullable=False),
        sa.Column("country", sa.String(100), nullable=True),
        sa.Column("account_status", sa.String(50), nullable=False, server_default="pending"),
        *_timestamps(),
    )
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)

    op.create_table(
        "admin_actions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("admin_id", sa.Integer(), sa.ForeignKey("admins.id", ondelete="CASCADE"), nullable=False),
        sa.Column("action_type", sa.String(100), nullable=False),
        sa.Column("target_type", sa.String(50), nullable=True),
        sa.Column("target_id", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("ip_address", sa.String(45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )
    op.create_index("ix_admin_actions_admin_id", "admin_actions", ["admin_id"])

    op.create_table(
        "submissions",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("user_email", sa.String(255), nullable=False),
        sa.Column("file_name", sa.String(500), nullable=False),
        sa.Column("file_type", sa.String(50), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="pending"),
        sa.Column("preview", sa.Text(), nullable=True),
        sa.Column("rejection_reason", sa.String(255), nullable=True),
        sa.Column("rejection_feedback", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_submissions_user_email", "submissions", ["user_email"])
    op.create_index("ix_submissions_status", "submissions", ["status"])

    op.create_table(
        "images",
        *_media_columns(),
        sa.Column("preview_data", sa.Text(), nullable=False),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        *_timestamps(),
    )
    for table in ("videos", "audio_files"):
        op.create_table(
            table,
            *_media_columns(),
            sa.Column("preview_data", sa.Text(), nullable=False),
            sa.Column("duration", sa.Integer(), nullable=True),
            *_timestamps(),
        )
    op.create_table(
        "web_data",
        *_media_columns(),
        sa.Column("preview_data", sa.Text(), nullable=True),
        sa.Column("file_extension", sa.String(50), nullable=True),
        *_timestamps(),
    )
    for table in ("images", "videos", "audio_files", "web_data"):
        op.create_index(f"ix_{table}_submission_id", table, ["submission_id"])

    op.create_table(
        "submission_comments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("submission_id", sa.String(255), sa.ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("author_email", sa.String(255), nullable=False),
        sa.Column("author_type", sa.String(50), nullable=False),
        sa.Column("comment_text", sa.Text(), nullable=False),
        sa.Column(
            "parent_comment_id", sa.Integer(),
            sa.ForeignKey("submission_comments.id", ondelete="CASCADE"), nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_submission_comments_submission_id", "submission_comments", ["submission_id"])
    op.create_index("ix_submission_comments_author_email", "submission_comments", ["author_email"])
    op.create_index("ix_submission_comments_parent_comment_id", "submission_comments", ["parent_comment_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("user_email", sa.String(255), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("action_url", sa.String(500), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_notifications_user_email", "notifications", ["user_email"])
    op.create_index("ix_notifications_created_at", "notifications", ["created_at"])
    op.create_index("idx_notifications_user_read", "notifications", ["user_email", "read"])

    op.create_table(
        "validation_queue",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("submission_id", sa.String(255), sa.ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("admin_email", sa.String(255), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="pending"),
        *_timestamps(),
        sa.UniqueConstraint("submission_id", "admin_email", name="uq_validation_queue_submission_admin"),
    )
    op.create_index("ix_validation_queue_submission_id", "validation_queue", ["submission_id"])
    op.create_index("ix_validation_queue_admin_email", "validation_queue", ["admin_email"])


def downgrade() -> None:
    for table in (
        "validation_queue",
        "notifications",
        "submission_comments",
        "web_data",
        "audio_files",
        "videos",
        "images",
        "submissions",
        "admin_actions",
        "admins",
        "users",
    ):
        op.drop_table(table)
