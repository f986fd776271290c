from flask import current_app
from sqlalchemy.exc import IntegrityError

from campusvote.models import Admin
from campusvote.services.errors import ConflictError, NotFoundError, ValidationError
from campusvote.services.security import hash_password, verify_password
from campusvote.services.store import commit, store_read


class AdminService:
    def __init__(self, session):
        self.session = session

    def register_admin(self, username, password, full_name=None, email=None):
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required.")
        if not password or len(password) < 8:
            raise ValidationError("Password must be at least 8 characters long.")
        if self.username_exists(username):
            raise ConflictError(f"Username {username} is taken.")

        admin = Admin(
            username=username,
            password_hash=hash_password(password),
            full_name=full_name,
            email=(email or "").strip().lower() or None,
        )
        self.session.add(admin)
        try:
            commit(self.session, "registering admin")
        except IntegrityError as exc:
            raise ConflictError(f"Username {username} is taken.") from exc

        current_app.logger.info("Admin %s registered", username)
        return admin

    @store_read("authenticating admin")
    def authenticate_admin(self, username, password):
        admin = self.session.query(Admin).filter_by(username=username).first()
        if not admin or not verify_password(admin.password_hash, password):
            current_app.logger.warning("Failed admin login for %s", username)
            return None
        return admin

    @store_read("checking admin")
    def username_exists(self, username):
        return self.session.query(Admin.id).filter_by(username=username).first() is not None

    @store_read("loading admin")
    def get_admin(self, admin_id):
        admin = self.session.get(Admin, admin_id)
        if admin is None:
            raise NotFoundError(f"Admin {admin_id} not found.")
        return admin

    def change_password(self, admin_id, current_password, new_password):
        admin = self.get_admin(admin_id)
        if not verify_password(admin.password_hash, current_password):
            raise ValidationError("Current password is incorrect.")
        if not new_password or len(new_password) < 8:
            raise ValidationError("Password must be at least 8 characters long.")

        admin.password_hash = hash_password(new_password)
        commit(self.session, "changing admin password")
        return admin
