from pydantic import BaseModel, EmailStr


class Pagination(BaseModel):
    page: int
    page_size: int
    total: int
    total_pages: int


class StudentRead(BaseModel):
    id: int
    full_name: str
    email: EmailStr
