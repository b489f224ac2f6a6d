from inventory_tui.app import main

main()
