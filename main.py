"""Development entrypoint: `python main.py` serves apicheck.service on $PORT."""
from apicheck.service import app, main

if __name__ == "__main__":
    main()
