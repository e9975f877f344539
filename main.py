# main.py

# Lets the application be started from a source checkout with `python main.py`.
# All commands live in file_explorer.main.
from file_explorer.main import main

if __name__ == '__main__':
    main()
