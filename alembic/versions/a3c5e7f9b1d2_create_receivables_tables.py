"""create clientes, funcionarios, formas_pagamento, contas_receber

Revision ID: a3c5e7f9b1d2
Revises:
Create Date: 2026-10-19

Contas a receber com baixa integral + formas de pagamento
"""
from typing import Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = 'a3c5e7f9b1d2'
down_revision: Union[str, None] = None
branch_labels: Union[str, None] = None
depends_on: Union[str, None] = None


def upgrade() -> None:
    # 1. Enums
    op.execute(
        "CREATE TYPE tipodocumento AS ENUM ('FATURA', 'DUPLICATA', 'BOLETO', 'NOTA_FISCAL')"
    )
    op.execute(
        "CREATE TYPE statusconta AS ENUM ('ABERTO', 'RECEBIDO', 'VENCIDO', 'CANCELADO')"
    )

    # 2. clientes
    op.create_table(
        'clientes',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('razao_social', sa.String(200), nullable=False),
        sa.Column('cnpj_cpf', sa.String(18), nullable=True),
        sa.Column('ativo', sa.Boolean, nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_clientes_cnpj_cpf', 'clientes', ['cnpj_cpf'])

    # 3. funcionarios
    op.create_table(
        'funcionarios',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('nome', sa.String(150), nullable=False),
        sa.Column('ativo', sa.Boolean, nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # 4. formas_pagamento
    op.create_table(
        'formas_pagamento',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('descricao', sa.String(100), nullable=False),
        sa.Column('codigo', sa.String(20), nullable=True, unique=True),
        sa.Column('tipo', sa.String(30), nullable=True),
        sa.Column('ativo', sa.Boolean, nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # 5. contas_receber
    op.create_table(
        'contas_receber',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('venda_numero_pedido', sa.Integer, nullable=True),
        sa.Column('venda_modelo', sa.String(2), nullable=True),
        sa.Column('venda_serie', sa.String(3), nullable=True),
        sa.Column('venda_cliente_id', sa.Integer, nullable=True),
        sa.Column('parcela', sa.Integer, nullable=True),
        sa.Column('cliente_id', sa.Integer, sa.ForeignKey('clientes.id'), nullable=False),
        sa.Column('numero_documento', sa.String(50), nullable=False),
        sa.Column('tipo_documento',
                  postgresql.ENUM('FATURA', 'DUPLICATA', 'BOLETO', 'NOTA_FISCAL',
                                  name='tipodocumento', create_type=False),
                  nullable=False, server_default='FATURA'),
        sa.Column('data_emissao', sa.Date, nullable=False),
        sa.Column('data_vencimento', sa.Date, nullable=False),
        sa.Column('data_recebimento', sa.Date, nullable=True),
        sa.Column('valor_original', sa.Numeric(12, 2), nullable=False),
        sa.Column('valor_desconto', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('valor_juros', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('valor_multa', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('valor_recebido', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('valor_saldo', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('forma_pagamento_id', sa.Integer,
                  sa.ForeignKey('formas_pagamento.id'), nullable=True),
        sa.Column('status',
                  postgresql.ENUM('ABERTO', 'RECEBIDO', 'VENCIDO', 'CANCELADO',
                                  name='statusconta', create_type=False),
                  nullable=False, server_default='ABERTO'),
        sa.Column('recebido_por', sa.Integer, sa.ForeignKey('funcionarios.id'), nullable=True),
        sa.Column('observacoes', sa.String(500), nullable=True),
        sa.Column('ativo', sa.Boolean, nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint(
            "status <> 'RECEBIDO' OR data_recebimento IS NOT NULL",
            name='ck_cr_recebido_com_data',
        ),
    )
    op.create_index('idx_cr_cliente', 'contas_receber', ['cliente_id'])
    op.create_index('idx_cr_status', 'contas_receber', ['status', 'ativo'])
    op.create_index('idx_cr_vencimento', 'contas_receber', ['data_vencimento'])


def downgrade() -> None:
    op.drop_table('contas_receber')
    op.drop_table('formas_pagamento')
    op.drop_table('funcionarios')
    op.drop_table('clientes')
    op.execute("DROP TYPE IF EXISTS statusconta")
    op.execute("DROP TYPE IF EXISTS tipodocumento")
