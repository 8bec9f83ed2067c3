from library_api.extensions import db
from library_api.repositories.user_repo import UserRepo
from library_api.services.book_service import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, clamp_paging


class UserService:
    @staticmethod
    def list_users(search=None, page=1, limit=DEFAULT_PAGE_SIZE):
        page, limit = clamp_paging(page, limit)
        return db.paginate(
            UserRepo.search_query((search or "").strip() or None),
            page=page,
            per_page=limit,
            max_per_page=MAX_PAGE_SIZE,
            error_out=False,
        )

    @staticmethod
    def total_users() -> int:
        return UserRepo.count()
