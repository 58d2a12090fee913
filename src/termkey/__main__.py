from termkey.daemon import main


if __name__ == '__main__':
    main()
