"""Lambda Blue — run from a source checkout."""

from lambda_blue.__main__ import main

if __name__ == "__main__":
    main()
