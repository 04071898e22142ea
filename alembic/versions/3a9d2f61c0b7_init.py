"""init

Revision ID: 3a9d2f61c0b7
Revises:
Create Date: 2026-10-19 10:12:31.204118
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = '3a9d2f61c0b7'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ESTADO_PROYECTO = ('Pendiente', 'En Progreso', 'Completado', 'Archivado', 'Cancelado')
ESTADO_ALBARAN = ('Borrador', 'Emitido', 'Firmado', 'Cancelado')
ESTADO_INVITACION = ('pending', 'accepted', 'expired', 'rejected')


def _timestamps():
    return [
        sa.Column('creado_en', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('actualizado_en', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # === usuarios ===
    op.create_table(
        'usuarios',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('nombre', sa.String(150), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('empresa_id', sa.String(36), nullable=False),
        sa.Column('empresa_nombre', sa.String(255)),
        sa.Column('empresa_direccion', sa.String(255)),
        sa.Column('empresa_cif', sa.String(50)),
        sa.Column('empresa_telefono', sa.String(50)),
        sa.Column('empresa_email', sa.String(255)),
        sa.Column('empresa_web', sa.String(255)),
        sa.Column('validado', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('token_validacion_email', sa.String(64)),
        sa.Column('expiracion_token_validacion_email', sa.DateTime()),
        sa.Column('token_reseteo_password', sa.String(64)),
        sa.Column('expiracion_token_reseteo_password', sa.DateTime()),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('deleted_at', sa.DateTime()),
        *_timestamps(),
    )
    op.create_index('ix_usuarios_email', 'usuarios', ['email'], unique=True)
    op.create_index('ix_usuarios_token_validacion_email', 'usuarios', ['token_validacion_email'])
    op.create_index('ix_usuarios_token_reseteo_password', 'usuarios', ['token_reseteo_password'])

    # === clientes ===
    op.create_table(
        'clientes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('nombre', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255)),
        sa.Column('telefono', sa.String(20)),
        sa.Column('direccion_calle', sa.String(255)),
        sa.Column('direccion_ciudad', sa.String(100)),
        sa.Column('direccion_codigo_postal', sa.String(20)),
        sa.Column('direccion_provincia', sa.String(100)),
        sa.Column('direccion_pais', sa.String(100)),
        sa.Column('usuario_id', sa.String(36), sa.ForeignKey('usuarios.id', ondelete='CASCADE'), nullable=False),
        sa.Column('empresa_id', sa.String(36)),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('deleted_at', sa.DateTime()),
        *_timestamps(),
    )
    op.create_index('ix_clientes_usuario_id', 'clientes', ['usuario_id'])

    # === proyectos ===
    op.create_table(
        'proyectos',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('nombre', sa.String(150), nullable=False),
        sa.Column('descripcion', sa.Text()),
        sa.Column('estado', sa.Enum(*ESTADO_PROYECTO, name='estadoproyecto'), nullable=False),
        sa.Column('cliente_id', sa.String(36), sa.ForeignKey('clientes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('usuario_id', sa.String(36), sa.ForeignKey('usuarios.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('archived_at', sa.DateTime()),
        sa.Column('eliminado', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('fecha_eliminacion', sa.DateTime()),
        *_timestamps(),
    )
    op.create_index('ix_proyectos_cliente_id', 'proyectos', ['cliente_id'])
    op.create_index('ix_proyectos_usuario_id', 'proyectos', ['usuario_id'])

    # === albaranes ===
    op.create_table(
        'albaranes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('numero_albaran', sa.String(50)),
        sa.Column('fecha_emision', sa.DateTime(), nullable=False),
        sa.Column('proyecto_id', sa.String(36), sa.ForeignKey('proyectos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('cliente_id', sa.String(36), sa.ForeignKey('clientes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('usuario_id', sa.String(36), sa.ForeignKey('usuarios.id', ondelete='CASCADE'), nullable=False),
        sa.Column('observaciones', sa.Text()),
        sa.Column('estado', sa.Enum(*ESTADO_ALBARAN, name='estadoalbaran'), nullable=False),
        sa.Column('ruta_firma', sa.String(500)),
        sa.Column('fecha_firma', sa.DateTime()),
        sa.Column('ruta_pdf', sa.String(500)),
        sa.Column('eliminado', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('fecha_eliminacion', sa.DateTime()),
        *_timestamps(),
    )
    op.create_index('ix_albaranes_proyecto_id', 'albaranes', ['proyecto_id'])
    op.create_index('ix_albaranes_cliente_id', 'albaranes', ['cliente_id'])
    op.create_index('ix_albaranes_usuario_id', 'albaranes', ['usuario_id'])

    # === lineas_albaran ===
    op.create_table(
        'lineas_albaran',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('albaran_id', sa.String(36), sa.ForeignKey('albaranes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('orden', sa.Integer(), nullable=False),
        sa.Column('descripcion', sa.String(500), nullable=False),
        sa.Column('cantidad', sa.Numeric(12, 3), nullable=False),
        sa.Column('unidad', sa.String(50), nullable=False),
        sa.Column('precio_unitario', sa.Numeric(15, 2), nullable=False),
    )
    op.create_index('ix_lineas_albaran_albaran_id', 'lineas_albaran', ['albaran_id'])

    # === invitaciones ===
    op.create_table(
        'invitaciones',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email_invitado', sa.String(255), nullable=False),
        sa.Column('nombre_empresa', sa.String(255), nullable=False),
        sa.Column('invitador_id', sa.String(36), sa.ForeignKey('usuarios.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(128), nullable=False, unique=True),
        sa.Column('expiracion', sa.DateTime(), nullable=False),
        sa.Column('estado', sa.Enum(*ESTADO_INVITACION, name='estadoinvitacion'), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        'ix_invitaciones_email_empresa_estado', 'invitaciones', ['email_invitado', 'nombre_empresa', 'estado']
    )


def downgrade() -> None:
    op.drop_table('invitaciones')
    op.drop_table('lineas_albaran')
    op.drop_table('albaranes')
    op.drop_table('proyectos')
    op.drop_table('clientes')
    op.drop_table('usuarios')
