"""Seed the configured store with a demo user and its default task list."""
import sys

from taskboard.database import create_storage
from taskboard.models import find_by_email, new_task_list, new_user
from taskboard.routers.auth import get_password_hash

email = sys.argv[1] if len(sys.argv) > 1 else "test@example.com"
password = sys.argv[2] if len(sys.argv) > 2 else "password"

storage = create_storage()

with storage.transaction() as db:
    if find_by_email(db["users"], email):
        print("User already exists")
    else:
        user = new_user(email, get_password_hash(password))
        task_list = new_task_list(user["id"])
        user["defaultTaskListId"] = task_list["id"]
        db["users"].append(user)
        db["taskLists"].append(task_list)
        print(f"Test user created: {email} / {password}")

storage.close()
