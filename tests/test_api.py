from datetime import date, timedelta

from library_api.errors import StorageUnavailable
from library_api.services.book_service import BookService
from library_api.services.mail_service import MailService


def _book_payload(isbn="001232"):
    return {"title": "As Aventuras de Tim Tim", "author": "TimTim", "isbn": isbn}


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_create_book(client):
    response = client.post("/api/books", json=_book_payload())

    assert response.status_code == 201
    data = response.get_json()["data"]
    assert data["id"] is not None
    assert data["title"] == "As Aventuras de Tim Tim"
    assert data["author"] == "TimTim"
    assert data["isbn"] == "001232"


def test_create_book_validation_errors(client):
    response = client.post("/api/books", json={})

    assert response.status_code == 400
    assert len(response.get_json()["errors"]) == 3


def test_create_book_duplicate_isbn(client, make_book):
    make_book(isbn="001232")

    response = client.post("/api/books", json=_book_payload())

    assert response.status_code == 400
    assert response.get_json()["message"] == "Isbn already registered."


def test_get_book(client, make_book):
    book = make_book()

    response = client.get(f"/api/books/{book.id}")

    assert response.status_code == 200
    assert response.get_json()["data"]["isbn"] == "123"


def test_get_book_not_found(client):
    assert client.get("/api/books/1").status_code == 404


def test_update_book(client, make_book):
    book = make_book()

    response = client.put(f"/api/books/{book.id}", json={"title": "Novo", "author": "Outro", "isbn": "321"})

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["title"] == "Novo"
    assert data["author"] == "Outro"
    assert data["isbn"] == "123"


def test_update_book_not_found(client):
    assert client.put("/api/books/1", json=_book_payload()).status_code == 404


def test_delete_book(client, make_book):
    book = make_book()

    assert client.delete(f"/api/books/{book.id}").status_code == 204
    assert client.get(f"/api/books/{book.id}").status_code == 404


def test_delete_book_not_found(client):
    assert client.delete("/api/books/1").status_code == 404


def test_delete_loaned_book_conflict(client, make_book, make_loan):
    book = make_book()
    make_loan(book)

    assert client.delete(f"/api/books/{book.id}").status_code == 409


def test_find_books(client, make_book):
    make_book(isbn="1", title="As Aventuras", author="Fulano")
    make_book(isbn="2", title="Outro", author="Beltrano")

    response = client.get("/api/books?title=Aventuras&page=0&size=100")

    body = response.get_json()
    assert response.status_code == 200
    assert len(body["content"]) == 1
    assert body["total_elements"] == 1
    assert body["size"] == 100
    assert body["page"] == 0


def test_find_books_bad_page(client):
    assert client.get("/api/books?page=-1").status_code == 400
    assert client.get("/api/books?size=abc").status_code == 400


def test_create_loan(client, make_book):
    make_book(isbn="123")

    response = client.post("/api/loans", json={"isbn": "123", "customer": "Fulano", "email": "f@email.com"})

    assert response.status_code == 201
    loan_id = response.get_json()["id"]
    loan = client.get(f"/api/loans/{loan_id}").get_json()["data"]
    assert loan["customer"] == "Fulano"
    assert loan["email"] == "f@email.com"
    assert loan["returned"] is False
    assert loan["loan_date"] == date.today().isoformat()
    assert loan["book"]["isbn"] == "123"


def test_create_loan_unknown_isbn(client):
    response = client.post("/api/loans", json={"isbn": "123", "customer": "Fulano"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Book not found for passed isbn."


def test_create_loan_for_loaned_book(client, make_book, make_loan):
    make_loan(make_book(isbn="123"))

    response = client.post("/api/loans", json={"isbn": "123", "customer": "Beltrano"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Book already loaned."


def test_return_loan(client, make_book, make_loan):
    loan = make_loan(make_book())

    response = client.patch(f"/api/loans/{loan.id}", json={"returned": True})

    assert response.status_code == 200
    assert response.get_json()["data"]["returned"] is True


def test_return_unknown_loan(client):
    assert client.patch("/api/loans/5", json={"returned": True}).status_code == 404


def test_find_loans(client, make_book, make_loan):
    make_loan(make_book(isbn="123"), customer="Beltrano")
    make_loan(make_book(isbn="456"), customer="Fulano")

    body = client.get("/api/loans?isbn=123&customer=Fulano").get_json()

    assert body["total_elements"] == 2
    assert {loan["customer"] for loan in body["content"]} == {"Beltrano", "Fulano"}


def test_loans_by_book(client, make_book, make_loan):
    book = make_book()
    make_loan(book, returned=True)
    make_loan(book, customer="Beltrano")

    body = client.get(f"/api/books/{book.id}/loans?size=10").get_json()

    assert body["total_elements"] == 2
    assert client.get("/api/books/999/loans").status_code == 404


def test_run_late_check(client, app, make_book, make_loan, monkeypatch):
    sent = []
    monkeypatch.setattr(MailService, "send_mails", staticmethod(lambda m, r, subject=None: sent.append(r) or True))
    make_loan(make_book(), email="late@email.com", loan_date=date.today() - timedelta(days=10))

    response = client.post("/api/notifications/run-late-check")

    assert response.status_code == 200
    assert response.get_json()["notified"] == 1
    assert sent == [["late@email.com"]]


def test_storage_unavailable_maps_to_503(client, monkeypatch):
    def unavailable(book_id):
        raise StorageUnavailable()

    monkeypatch.setattr(BookService, "get_by_id", staticmethod(unavailable))

    response = client.get("/api/books/1")

    assert response.status_code == 503
    assert response.get_json()["message"] == "Storage unavailable."


def test_return_loan_requires_returned_true(client, make_book, make_loan):
    loan = make_loan(make_book())

    assert client.patch(f"/api/loans/{loan.id}", json={"returned": False}).status_code == 400
    assert client.patch(f"/api/loans/{loan.id}", json={}).status_code == 400
    assert client.get(f"/api/loans/{loan.id}").get_json()["data"]["returned"] is False


def test_returned_loan_cannot_be_reopened(client, make_book, make_loan):
    book = make_book()
    old = make_loan(book, returned=True)
    make_loan(book, customer="Beltrano")

    response = client.patch(f"/api/loans/{old.id}", json={"returned": False})

    assert response.status_code == 400
    assert client.get(f"/api/loans/{old.id}").get_json()["data"]["returned"] is True
    assert client.get(f"/api/books/{book.id}/loans").get_json()["total_elements"] == 2
