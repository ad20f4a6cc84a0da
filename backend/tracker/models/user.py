# ============================================
# tracker/models/user.py
# ============================================
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models

from tracker.policies.roles import Role


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Email is required")
        user = self.model(email=self.normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('role', Role.ADMIN)
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    firstname = models.CharField(max_length=150)
    lastname = models.CharField(max_length=150, blank=True, default='')
    email = models.EmailField(max_length=255, unique=True, db_index=True)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.MANAGER)
    picture_data = models.BinaryField(null=True, blank=True)
    picture_content_type = models.CharField(max_length=100, blank=True, default='')
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['firstname']

    class Meta:
        db_table = 'users'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.full_name} <{self.email}> ({self.role})"

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}".strip()
