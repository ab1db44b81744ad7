"""Host adapters wiring native widgets to the input deduction core."""
