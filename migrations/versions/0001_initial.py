from alembic import op
import sqlalchemy as sa

revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'airport_cache',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('airport_id', sa.String, nullable=False),
        sa.Column('name', sa.String),
        sa.Column('state', sa.String),
        sa.Column('country', sa.String),
        sa.Column('latitude', sa.Float),
        sa.Column('longitude', sa.Float),
        sa.Column('elevation', sa.Float),
        sa.Column('cached_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_airport_cache_airport_id', 'airport_cache', ['airport_id'], unique=True)
    op.create_index('idx_airport_cache_lat_lon', 'airport_cache', ['latitude', 'longitude'])
    op.create_table(
        'station_cache',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('station_id', sa.String, nullable=False),
        sa.Column('site', sa.String),
        sa.Column('state', sa.String),
        sa.Column('country', sa.String),
        sa.Column('latitude', sa.Float),
        sa.Column('longitude', sa.Float),
        sa.Column('elevation', sa.Integer),
        sa.Column('cached_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_station_cache_station_id', 'station_cache', ['station_id'], unique=True)
    op.create_index('idx_station_cache_lat_lon', 'station_cache', ['latitude', 'longitude'])

def downgrade():
    op.drop_index('idx_station_cache_lat_lon', table_name='station_cache')
    op.drop_index('ix_station_cache_station_id', table_name='station_cache')
    op.drop_table('station_cache')
    op.drop_index('idx_airport_cache_lat_lon', table_name='airport_cache')
    op.drop_index('ix_airport_cache_airport_id', table_name='airport_cache')
    op.drop_table('airport_cache')
