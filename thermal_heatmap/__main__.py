from thermal_heatmap.heatmap_live import main

main()
