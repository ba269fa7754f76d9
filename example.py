"""Example usage of the boxgen library."""

from boxgen import Binding
from boxgen.dump import format_binding

# Go source declaring the entities, as a generator would read it from disk
source = """
package model

type User struct {
    Id    uint64
    Name  string `unique`
    Email string `index:"hash" nameInDb:"mail"`
    Temp  []byte `transient`
}

type Order struct {
    Id       uint64
    Customer uint64 `link:"User"`
    Placed   int64  `date`
    Total    float64
}
"""

binding = Binding.from_source(source)
print(format_binding(binding))

# Property ids come from the model registry; assign them in order here
for entity in binding.entities:
    for i, prop in enumerate(entity.properties, start=1):
        prop.id = i

print()
for prop in binding.get_entity("Order").properties:
    print(f"{prop.name}: slot {prop.fb_slot()}, vtable offset {prop.fbv_table_offset()}")
