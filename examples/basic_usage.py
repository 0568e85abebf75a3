"""
Basic Usage Example: Member Registration

This example demonstrates the core fieldcast workflow:
1. Declare a fieldset with field types, metadata and rules
2. Validate raw form input and read back cleaned values and error kinds
3. Turn error kinds into readable messages
4. Generate a Pydantic model that validates through the same fieldset
"""

from fieldcast import Schema, ValidationError, field


class Badge:
    """Item class for the badges collection."""

    def __init__(self, code: str = ""):
        self.code = code


class MemberSchema(Schema):
    """Schema for a club membership form."""

    username = field("text", required=True, min_length=3, max_length=20, unique=True)
    email = field("email", required=True, label="E-mail address")
    age = field("integer", min=16, max=120)
    newsletter = field("boolean")
    joined = field("date", nullable=True)
    website = field("url")
    level = field("text", values=["bronze", "silver", "gold"], default="bronze")
    postcode = field("text", regex=r"^[A-Z]{1,2}\d")
    badges = field("collection", class_=Badge)


def main() -> None:
    """Validate a good and a bad form submission."""

    # 1. Defaults for a blank form
    print(f"[OK] Blank form: {MemberSchema.defaults()}")

    # 2. Validate raw string input, as it arrives from an HTML form
    form = {
        "username": "  ada_l ",
        "email": "ada@acme.io",
        "age": "36",
        "newsletter": "on",
        "joined": "10 December 2023",
        "website": "https://acme.io/~ada",
        "level": "gold",
        "postcode": "SW1A 1AA",
    }
    cleaned, errors = MemberSchema.validate(form)
    print(f"[OK] Cleaned: {cleaned}")
    assert not errors

    # 3. A bad submission keeps the raw values and reports one error per field
    bad_form = {"username": "al", "email": "", "age": "12", "newsletter": "maybe"}
    cleaned, errors = MemberSchema.validate(bad_form)
    for name, message in MemberSchema.fieldset().describe_errors(errors).items():
        print(f"[ERROR] {name}: {message}")

    # 4. Strict mode raises instead
    try:
        MemberSchema.validate(bad_form, strict=True)
    except ValidationError as exc:
        print(f"[OK] Raised: {exc}")

    # 5. The same fieldset backs a Pydantic model
    Member = MemberSchema.to_pydantic()
    member = Member(
        username="grace", email="grace@acme.io", age="45", postcode="N1 9GU"
    )
    print(f"[OK] {Member.__name__}: {member.model_dump()}")


if __name__ == "__main__":
    main()
