"""Comment service — append-only task discussion."""

from typing import List, Tuple

from taskflow.db.memory import EntityStore
from taskflow.models import Comment, User


class CommentService:

    @staticmethod
    def create(store: EntityStore, task_id: str, user_id: str, content: str) -> Comment:
        comment = Comment(task_id=task_id, user_id=user_id, content=content)
        return store.comments.add(comment)

    @staticmethod
    def get_by_task(store: EntityStore, task_id: str) -> List[Tuple[Comment, User]]:
        """Comments joined with their author; comments by deleted users are dropped."""
        comments = []
        for comment in store.comments.find_by("task_id", task_id):
            user = store.users.get(comment.user_id)
            if user is not None:
                comments.append((comment, user))
        return comments


comment_service = CommentService()
