from easy_expose.commands import run


if __name__ == "__main__":
    run()
