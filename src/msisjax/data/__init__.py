"""Data files bundled with msisjax (``nrlmsise-00_data.c``)."""
