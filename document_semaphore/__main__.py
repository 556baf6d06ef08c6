from document_semaphore.main import main

if __name__ == "__main__":
    main()
