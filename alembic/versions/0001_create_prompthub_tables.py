from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "0001_create_prompthub_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

PROMPT_CATEGORIES = (
    "art",
    "coding",
    "writing",
    "marketing",
    "business",
    "education",
    "productivity",
    "entertainment",
    "other",
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("user_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("username", sa.String(length=64), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.String(length=512), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )
    op.create_index(op.f("ix_profiles_username"), "profiles", ["username"], unique=False)
    op.create_index("uq_profiles_username_lower", "profiles", [sa.text("lower(username)")], unique=True)

    op.create_table(
        "prompts",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("prompt_text", sa.Text(), nullable=False),
        sa.Column(
            "category",
            sa.Enum(*PROMPT_CATEGORIES, name="prompt_category"),
            server_default=sa.text("'other'"),
            nullable=False,
        ),
        sa.Column("output_url", sa.String(length=512), nullable=True),
        sa.Column("likes_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("comments_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("views_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("is_paid", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("price", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_prompts_user_id"), "prompts", ["user_id"], unique=False)
    op.create_index(op.f("ix_prompts_category"), "prompts", ["category"], unique=False)
    op.create_index(op.f("ix_prompts_created_at"), "prompts", ["created_at"], unique=False)

    op.create_table(
        "prompt_steps",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("prompt_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("step_number", sa.Integer(), nullable=False),
        sa.Column("step_text", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["prompt_id"], ["prompts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_prompt_steps_prompt_id"), "prompt_steps", ["prompt_id"], unique=False)

    op.create_table(
        "likes",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("prompt_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["prompt_id"], ["prompts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("prompt_id", "user_id", name="uq_likes_prompt_user"),
    )
    op.create_index(op.f("ix_likes_prompt_id"), "likes", ["prompt_id"], unique=False)
    op.create_index(op.f("ix_likes_user_id"), "likes", ["user_id"], unique=False)

    op.create_table(
        "comments",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("prompt_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("parent_id", sa.UUID(as_uuid=False), nullable=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["prompt_id"], ["prompts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_comments_prompt_id"), "comments", ["prompt_id"], unique=False)
    op.create_index(op.f("ix_comments_user_id"), "comments", ["user_id"], unique=False)

    op.create_table(
        "saved_prompts",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("prompt_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["prompt_id"], ["prompts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("prompt_id", "user_id", name="uq_saved_prompts_prompt_user"),
    )
    op.create_index(op.f("ix_saved_prompts_prompt_id"), "saved_prompts", ["prompt_id"], unique=False)
    op.create_index(op.f("ix_saved_prompts_user_id"), "saved_prompts", ["user_id"], unique=False)

    op.create_table(
        "collections",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_public", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_collections_user_id"), "collections", ["user_id"], unique=False)

    op.create_table(
        "collection_prompts",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("collection_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("prompt_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("added_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["collection_id"], ["collections.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["prompt_id"], ["prompts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("collection_id", "prompt_id", name="uq_collection_prompts_collection_prompt"),
    )
    op.create_index(op.f("ix_collection_prompts_collection_id"), "collection_prompts", ["collection_id"], unique=False)
    op.create_index(op.f("ix_collection_prompts_prompt_id"), "collection_prompts", ["prompt_id"], unique=False)

    op.create_table(
        "prompt_purchases",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("prompt_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("purchase_price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("purchased_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["prompt_id"], ["prompts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "prompt_id", name="uq_prompt_purchases_user_prompt"),
    )
    op.create_index(op.f("ix_prompt_purchases_user_id"), "prompt_purchases", ["user_id"], unique=False)
    op.create_index(op.f("ix_prompt_purchases_prompt_id"), "prompt_purchases", ["prompt_id"], unique=False)

    op.create_table(
        "prompt_views",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("prompt_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.UUID(as_uuid=False), nullable=True),
        sa.Column("viewed_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["prompt_id"], ["prompts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_prompt_views_prompt_id"), "prompt_views", ["prompt_id"], unique=False)

    op.create_table(
        "ad_revenue",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("prompt_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("revenue_amount", sa.Numeric(precision=10, scale=2), server_default=sa.text("0"), nullable=False),
        sa.Column("platform_share", sa.Numeric(precision=10, scale=2), server_default=sa.text("0"), nullable=False),
        sa.Column("user_share", sa.Numeric(precision=10, scale=2), server_default=sa.text("0"), nullable=False),
        sa.Column("ad_impressions", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("revenue_date", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["prompt_id"], ["prompts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_ad_revenue_user_id"), "ad_revenue", ["user_id"], unique=False)
    op.create_index(op.f("ix_ad_revenue_prompt_id"), "ad_revenue", ["prompt_id"], unique=False)

    op.create_table(
        "withdrawal_requests",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("amount", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("status", sa.String(length=16), server_default=sa.text("'pending'"), nullable=False),
        sa.Column("payment_method", sa.String(length=32), nullable=True),
        sa.Column("payment_details", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("requested_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_withdrawal_requests_user_id"), "withdrawal_requests", ["user_id"], unique=False)

    op.create_table(
        "user_monetization",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("is_monetized", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("status", sa.String(length=16), server_default=sa.text("'pending'"), nullable=False),
        sa.Column("requested_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rejected_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_monetization_user_id"), "user_monetization", ["user_id"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_user_monetization_user_id"), table_name="user_monetization")
    op.drop_table("user_monetization")
    op.drop_index(op.f("ix_withdrawal_requests_user_id"), table_name="withdrawal_requests")
    op.drop_table("withdrawal_requests")
    op.drop_index(op.f("ix_ad_revenue_prompt_id"), table_name="ad_revenue")
    op.drop_index(op.f("ix_ad_revenue_user_id"), table_name="ad_revenue")
    op.drop_table("ad_revenue")
    op.drop_index(op.f("ix_prompt_views_prompt_id"), table_name="prompt_views")
    op.drop_table("prompt_views")
    op.drop_index(op.f("ix_prompt_purchases_prompt_id"), table_name="prompt_purchases")
    op.drop_index(op.f("ix_prompt_purchases_user_id"), table_name="prompt_purchases")
    op.drop_table("prompt_purchases")
    op.drop_index(op.f("ix_collection_prompts_prompt_id"), table_name="collection_prompts")
    op.drop_index(op.f("ix_collection_prompts_collection_id"), table_name="collection_prompts")
    op.drop_table("collection_prompts")
    op.drop_index(op.f("ix_collections_user_id"), table_name="collections")
    op.drop_table("collections")
    op.drop_index(op.f("ix_saved_prompts_user_id"), table_name="saved_prompts")
    op.drop_index(op.f("ix_saved_prompts_prompt_id"), table_name="saved_prompts")
    op.drop_table("saved_prompts")
    op.drop_index(op.f("ix_comments_user_id"), table_name="comments")
    op.drop_index(op.f("ix_comments_prompt_id"), table_name="comments")
    op.drop_table("comments")
    op.drop_index(op.f("ix_likes_user_id"), table_name="likes")
    op.drop_index(op.f("ix_likes_prompt_id"), table_name="likes")
    op.drop_table("likes")
    op.drop_index(op.f("ix_prompt_steps_prompt_id"), table_name="prompt_steps")
    op.drop_table("prompt_steps")
    op.drop_index(op.f("ix_prompts_created_at"), table_name="prompts")
    op.drop_index(op.f("ix_prompts_category"), table_name="prompts")
    op.drop_index(op.f("ix_prompts_user_id"), table_name="prompts")
    op.drop_table("prompts")
    sa.Enum(name="prompt_category").drop(op.get_bind(), checkfirst=True)
    op.drop_index("uq_profiles_username_lower", table_name="profiles")
    op.drop_index(op.f("ix_profiles_username"), table_name="profiles")
    op.drop_table("profiles")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
