"""Initial Orca Payroll schema

Revision ID: 20260301_0900_initial_schema
Revises:
Create Date: 2026-03-01 09:00:00.000000

Tables:
- users: dashboard users (admin / finance / viewer)
- currencies, departments: admin-managed reference data
- employees, salary_records: payroll (net_salary is a generated column)
- fixed_assets, day_to_day_expenses: office expenses
- app_settings: reporting currency and exchange rates (JSON text)
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = '20260301_0900_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _id():
    return sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False)


def upgrade() -> None:
    """Create all tables."""
    user_role = postgresql.ENUM('admin', 'finance', 'viewer', name='userrole')
    employee_status = postgresql.ENUM('active', 'inactive', name='employeestatus')
    salary_status = postgresql.ENUM('pending', 'paid', 'deferred', name='salarystatus')
    asset_type = postgresql.ENUM('laptop', 'server', 'phone', 'furniture', name='assettype')
    asset_status = postgresql.ENUM('active', 'retired', name='assetstatus')
    expense_category = postgresql.ENUM(
        'utilities', 'internet', 'rent', 'software', 'travel', 'pantry', 'marketing', 'other',
        name='expensecategory',
    )
    expense_payment_status = postgresql.ENUM('pending', 'paid', name='expensepaymentstatus')

    op.create_table(
        'users',
        _id(),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('role', user_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'currencies',
        _id(),
        sa.Column('code', sa.String(10), nullable=False),
        sa.Column('name', sa.String(100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_currencies'),
        sa.UniqueConstraint('code', name='uq_currencies_code'),
    )

    op.create_table(
        'departments',
        _id(),
        sa.Column('name', sa.String(100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_departments'),
        sa.UniqueConstraint('name', name='uq_departments_name'),
    )

    op.create_table(
        'employees',
        _id(),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('employee_code', sa.String(50), nullable=True, comment='Human-facing employee ID (e.g., EMP-001)'),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('role', sa.String(100), nullable=True),
        sa.Column('department_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('currency_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('monthly_salary', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('joining_date', sa.Date(), nullable=False),
        sa.Column('payment_method_notes', sa.Text(), nullable=True),
        sa.Column('country', sa.String(100), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('status', employee_status, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_employees'),
        sa.ForeignKeyConstraint(
            ['department_id'], ['departments.id'],
            name='fk_employees_department_id_departments', ondelete='SET NULL',
        ),
        sa.ForeignKeyConstraint(
            ['currency_id'], ['currencies.id'],
            name='fk_employees_currency_id_currencies', ondelete='SET NULL',
        ),
    )
    op.create_index('ix_employees_employee_code', 'employees', ['employee_code'])
    op.create_index('ix_employees_department_id', 'employees', ['department_id'])
    op.create_index('ix_employees_currency_id', 'employees', ['currency_id'])
    op.create_index('ix_employees_status', 'employees', ['status'])

    op.create_table(
        'salary_records',
        _id(),
        sa.Column('employee_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('month', sa.Date(), nullable=False),
        sa.Column('base_salary', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('deductions', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('bonus', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column(
            'net_salary',
            sa.Numeric(precision=15, scale=2),
            sa.Computed('base_salary + bonus - deductions', persisted=True),
        ),
        sa.Column('status', salary_status, nullable=False),
        sa.Column('payment_date', sa.Date(), nullable=True),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.Column('receipt_url', sa.String(500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_salary_records'),
        sa.ForeignKeyConstraint(
            ['employee_id'], ['employees.id'],
            name='fk_salary_records_employee_id_employees', ondelete='CASCADE',
        ),
        sa.UniqueConstraint('employee_id', 'month', name='uq_salary_records_employee_month'),
    )
    op.create_index('ix_salary_records_employee_id', 'salary_records', ['employee_id'])
    op.create_index('ix_salary_records_month', 'salary_records', ['month'])
    op.create_index('ix_salary_records_status', 'salary_records', ['status'])

    op.create_table(
        'fixed_assets',
        _id(),
        sa.Column('asset_name', sa.String(255), nullable=False),
        sa.Column('asset_type', asset_type, nullable=False),
        sa.Column('purchase_date', sa.Date(), nullable=False),
        sa.Column('cost', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('currency_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('assigned_employee_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('depreciation_rate', sa.Numeric(precision=5, scale=2), nullable=True, comment='Annual depreciation rate (%)'),
        sa.Column('status', asset_status, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_fixed_assets'),
        sa.ForeignKeyConstraint(
            ['currency_id'], ['currencies.id'],
            name='fk_fixed_assets_currency_id_currencies', ondelete='SET NULL',
        ),
        sa.ForeignKeyConstraint(
            ['assigned_employee_id'], ['employees.id'],
            name='fk_fixed_assets_assigned_employee_id_employees', ondelete='SET NULL',
        ),
    )
    op.create_index('ix_fixed_assets_asset_type', 'fixed_assets', ['asset_type'])
    op.create_index('ix_fixed_assets_assigned_employee_id', 'fixed_assets', ['assigned_employee_id'])
    op.create_index('ix_fixed_assets_status', 'fixed_assets', ['status'])

    op.create_table(
        'day_to_day_expenses',
        _id(),
        sa.Column('category', expense_category, nullable=False),
        sa.Column('vendor', sa.String(255), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('currency_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('payment_status', expense_payment_status, nullable=False),
        sa.Column('receipt_url', sa.String(500), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_day_to_day_expenses'),
        sa.ForeignKeyConstraint(
            ['currency_id'], ['currencies.id'],
            name='fk_day_to_day_expenses_currency_id_currencies', ondelete='SET NULL',
        ),
    )
    op.create_index('ix_day_to_day_expenses_category', 'day_to_day_expenses', ['category'])
    op.create_index('ix_day_to_day_expenses_date', 'day_to_day_expenses', ['date'])

    op.create_table(
        'app_settings',
        _id(),
        sa.Column('key', sa.String(100), nullable=False),
        sa.Column('value', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_app_settings'),
    )
    op.create_index('ix_app_settings_key', 'app_settings', ['key'], unique=True)


def downgrade() -> None:
    """Drop all tables and enum types."""
    op.drop_table('app_settings')
    op.drop_table('day_to_day_expenses')
    op.drop_table('fixed_assets')
    op.drop_table('salary_records')
    op.drop_table('employees')
    op.drop_table('departments')
    op.drop_table('currencies')
    op.drop_table('users')

    for enum_name in (
        'expensepaymentstatus', 'expensecategory', 'assetstatus', 'assettype',
        'salarystatus', 'employeestatus', 'userrole',
    ):
        postgresql.ENUM(name=enum_name).drop(op.get_bind(), checkfirst=True)
