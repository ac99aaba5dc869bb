from taskdash.main import main

main()
