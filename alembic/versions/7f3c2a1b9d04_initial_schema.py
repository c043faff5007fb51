"""Initial FoodList schema

Revision ID: 7f3c2a1b9d04
Revises:
Create Date: 2025-06-02 10:24:51.418203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7f3c2a1b9d04'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _taxonomy_table(name: str):
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )


def _restaurant_tag_table(name: str, column: str, target: str):
    op.create_table(
        name,
        sa.Column(
            "restaurant_id",
            sa.String(36),
            sa.ForeignKey("restaurants.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            column,
            sa.Integer(),
            sa.ForeignKey(f"{target}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


def upgrade():
    """프로필, 식당, 리뷰, 리스트, 방문 기록, 분류 테이블 생성"""
    op.create_table(
        "profiles",
        sa.Column("user_id", sa.String(64), primary_key=True),
        sa.Column("user_id_code", sa.String(8), nullable=False, unique=True),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("phone_number", sa.Text(), nullable=True),
        sa.Column("public_profile", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("total_restaurants_visited", sa.Integer(), nullable=False),
        sa.Column("total_reviews", sa.Integer(), nullable=False),
        sa.Column("total_lists", sa.Integer(), nullable=False),
        sa.Column("total_restaurants_added", sa.Integer(), nullable=False),
    )
    op.create_index("profiles_public_profile_index", "profiles", ["public_profile"])
    op.create_index("profiles_created_at_index", "profiles", ["created_at"])

    _taxonomy_table("cuisine_types")
    _taxonomy_table("dietary_options")
    _taxonomy_table("features")

    op.create_table(
        "restaurants",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("price_per_person", sa.Float(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("latitude", sa.Float(53), nullable=True),
        sa.Column("longitude", sa.Float(53), nullable=True),
        sa.Column("source_url", sa.Text(), nullable=True),
        sa.Column("menu_url", sa.Text(), nullable=True),
        sa.Column("phone_numbers", sa.JSON(), nullable=False),
        sa.Column("creator_id", sa.String(64), nullable=True),
        sa.Column("creator_name", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("restaurants_name_index", "restaurants", ["name"])
    op.create_index("restaurants_creator_id_index", "restaurants", ["creator_id"])
    op.create_index(
        "restaurants_created_at_index", "restaurants", ["created_at", "id"]
    )

    _restaurant_tag_table("restaurant_cuisine_types", "cuisine_type_id", "cuisine_types")
    _restaurant_tag_table(
        "restaurant_dietary_options", "dietary_option_id", "dietary_options"
    )
    _restaurant_tag_table("restaurant_features", "feature_id", "features")

    op.create_table(
        "reviews",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "restaurant_id",
            sa.String(36),
            sa.ForeignKey("restaurants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("user_name", sa.Text(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("amount_spent", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "restaurant_id", "user_id", name="reviews_restaurant_user_key"
        ),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="check_rating_range"),
    )
    op.create_index("reviews_restaurant_id_index", "reviews", ["restaurant_id"])
    op.create_index(
        "reviews_user_id_created_at_index", "reviews", ["user_id", "created_at", "id"]
    )

    op.create_table(
        "lists",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("creator_id", sa.String(64), nullable=False),
        sa.Column("creator_name", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("lists_name_index", "lists", ["name"])
    op.create_index(
        "lists_creator_id_created_at_index", "lists", ["creator_id", "created_at", "id"]
    )

    op.create_table(
        "list_restaurants",
        sa.Column(
            "list_id",
            sa.String(36),
            sa.ForeignKey("lists.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "restaurant_id",
            sa.String(36),
            sa.ForeignKey("restaurants.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "user_restaurant_visits",
        sa.Column("user_id", sa.String(64), primary_key=True),
        sa.Column(
            "restaurant_id",
            sa.String(36),
            sa.ForeignKey("restaurants.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("visited", sa.Boolean(), nullable=False),
        sa.Column("visit_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("visit_count >= 0", name="check_visit_count_not_negative"),
    )


def downgrade():
    """모든 테이블 삭제"""
    op.drop_table("user_restaurant_visits")
    op.drop_table("list_restaurants")
    op.drop_index("lists_creator_id_created_at_index", table_name="lists")
    op.drop_index("lists_name_index", table_name="lists")
    op.drop_table("lists")
    op.drop_index("reviews_user_id_created_at_index", table_name="reviews")
    op.drop_index("reviews_restaurant_id_index", table_name="reviews")
    op.drop_table("reviews")
    op.drop_table("restaurant_features")
    op.drop_table("restaurant_dietary_options")
    op.drop_table("restaurant_cuisine_types")
    op.drop_index("restaurants_created_at_index", table_name="restaurants")
    op.drop_index("restaurants_creator_id_index", table_name="restaurants")
    op.drop_index("restaurants_name_index", table_name="restaurants")
    op.drop_table("restaurants")
    op.drop_table("features")
    op.drop_table("dietary_options")
    op.drop_table("cuisine_types")
    op.drop_index("profiles_created_at_index", table_name="profiles")
    op.drop_index("profiles_public_profile_index", table_name="profiles")
    op.drop_table("profiles")
