"""Colors of the sample package."""

# enumgen:type Color
# prefix: Color
# zero: None_
# text-marshal: true
# values:
#   - name: Red
#   - name: Green
#   - name: Blue
