"""User registration, profile management and authentication."""

import logging
from uuid import uuid4

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from api.deps import ApiError, form_or_json, get_config, get_files, get_store, save_upload
from api.schemas import Credentials
from property_market.storage.documents import DocumentStore
from property_market.storage.files import FileStore
from property_market.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()

USERS = "users"
VENDORS = "vendors"


def public_user(user: dict) -> dict:
    """User document without the password hash."""
    return {key: value for key, value in user.items() if key != "password"}


@router.get("/")
async def no_query():
    return {"status": "error", "message": "no query"}


@router.post("/daftar", status_code=201)
def register(
    request: Request,
    email: str | None = Form(None),
    nama: str | None = Form(None),
    no_hp: str | None = Form(None),
    peran: str | None = Form(None),
    password: str | None = Form(None),
    confirmPassword: str | None = Form(None),
    profile: UploadFile | None = File(None),
    store: DocumentStore = Depends(get_store),
    files: FileStore = Depends(get_files),
    config: dict = Depends(get_config),
):
    """Register a new user with an optional profile photo."""
    if not all([email, nama, no_hp, peran, password, confirmPassword]):
        raise ApiError(400, "Semua kolom harus diisi")
    if password != confirmPassword:
        raise ApiError(400, "Password dan Confirm Password tidak sama")
    if store.where(USERS, email=email):
        raise ApiError(400, "User dengan email yang sama sudah ada")

    profile_url = save_upload(request, files, profile) if profile and profile.filename else ""

    user_id = str(uuid4())
    store.set(USERS, user_id, {
        "id": user_id,
        "email": email,
        "nama": nama,
        "no_hp": no_hp,
        "peran": peran,
        "password": hash_password(password, rounds=config["security"]["bcrypt_rounds"]),
        "profile": profile_url,
    })

    logger.info(f"Registered user {user_id}")
    return {"status": "success", "message": "Data user berhasil ditambahkan"}


@router.get("/{user_id}")
def get_user(user_id: str, store: DocumentStore = Depends(get_store)):
    user = store.get(USERS, user_id)
    if user is None:
        raise ApiError(404, "Data user tidak ditemukan")
    return public_user(user)


@router.put("/update/{user_id}")
def update_user(
    request: Request,
    user_id: str,
    nama: str | None = Form(None),
    peran: str | None = Form(None),
    no_hp: str | None = Form(None),
    password: str | None = Form(None),
    profile: UploadFile | None = File(None),
    store: DocumentStore = Depends(get_store),
    files: FileStore = Depends(get_files),
    config: dict = Depends(get_config),
):
    """Update the supplied fields of a user; the rest keep their values."""
    user = store.get(USERS, user_id)
    if user is None:
        raise ApiError(404, "Data user tidak ditemukan")

    profile_url = user.get("profile")
    if profile and profile.filename:
        profile_url = save_upload(request, files, profile)

    store.update(USERS, user_id, {
        "nama": nama or user.get("nama"),
        "no_hp": no_hp or user.get("no_hp"),
        "peran": peran or user.get("peran"),
        "profile": profile_url,
        "password": (
            hash_password(password, rounds=config["security"]["bcrypt_rounds"])
            if password else user.get("password")
        ),
    })
    return {"status": "success", "message": "Data user berhasil diperbarui", "data": user_id}


@router.delete("/delete/{user_id}")
def delete_user(user_id: str, store: DocumentStore = Depends(get_store)):
    """Delete a user and the vendor profiles linked to it."""
    if not store.exists(USERS, user_id):
        raise ApiError(404, "Data user tidak ditemukan")

    store.delete(USERS, user_id)
    removed = store.delete_where(VENDORS, id=user_id)
    logger.info(f"Deleted user {user_id} and {removed} vendor profile(s)")
    return {"status": "success", "message": "Data user dan vendor terkait berhasil dihapus"}


@router.post("/auth")
def authenticate(
    credentials: Credentials = Depends(form_or_json(Credentials)),
    store: DocumentStore = Depends(get_store),
):
    """Check email and password; returns the user on success."""
    if not credentials.email or not credentials.password:
        raise ApiError(400, "Email dan password harus diisi")

    users = store.where(USERS, email=credentials.email)
    if not users:
        raise ApiError(404, "Email atau password salah")

    user = users[0]
    if not verify_password(credentials.password, user.get("password", "")):
        raise ApiError(401, "Email atau password salah")

    return {"status": "success", "message": "Login berhasil", "data": public_user(user)}
