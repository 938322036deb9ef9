"""Sets, ranges, filters and text helpers used while searching for secrets."""