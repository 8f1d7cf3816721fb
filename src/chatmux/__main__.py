from chatmux.clients.disc import main

if __name__ == "__main__":
    main()
