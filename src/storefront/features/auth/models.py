from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin, generate_ksuid


class Role(str, Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class User(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(max_length=27, unique=True, default=generate_ksuid, db_index=True)
    email = fields.CharField(max_length=100, unique=True, db_index=True)
    name = fields.CharField(max_length=50)
    hashed_password = fields.CharField(max_length=255)
    role = fields.CharEnumField(Role, max_length=20, default=Role.EMPLOYEE)
    is_active = fields.BooleanField(default=True)

    def __str__(self):
        return f"{self.email} ({self.role})"

    class Meta:
        table = "users"
